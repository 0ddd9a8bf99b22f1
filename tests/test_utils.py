import pytest

from prpolicy.utils import abs_int32, element_of, file_ext, generate_random


def test_element_of_when_element_is_present():
    assert element_of(["hello", "world"], "world") is True


def test_element_of_when_element_is_not_present():
    assert element_of(["hello", "world"], "bye") is False


def test_file_ext_when_file_path_has_no_extension():
    assert file_ext("test/file") == ""


def test_file_ext_when_file_path_has_extension():
    assert file_ext("test/file.go") == ".go"


def test_file_ext_keeps_every_part_after_first_dot():
    assert file_ext("archive.tar.gz") == ".tar.gz"


def test_generate_random_stays_in_range():
    values = {generate_random(3) for _ in range(200)}
    assert values <= {0, 1, 2}


def test_generate_random_rejects_non_positive_size():
    with pytest.raises(ValueError):
        generate_random(0)


@pytest.mark.parametrize("value, expected", [(5, 5), (-5, 5), (0, 0)])
def test_abs_int32(value, expected):
    assert abs_int32(value) == expected


def test_abs_int32_minimum_wraps():
    assert abs_int32(-(2**31)) == -(2**31)


def test_abs_int32_rejects_out_of_range():
    with pytest.raises(ValueError):
        abs_int32(2**31)