import logging

import pytest

from prpolicy.fmtio import ContextError, errorf, log_println, sprint, sprintf


def test_errorf():
    err = errorf("test", "testing %v", "error message")
    assert isinstance(err, ContextError)
    assert str(err) == "[test] testing error message"
    assert err.context == "test"
    assert err.message == "testing error message"


def test_errorf_can_be_raised():
    err = errorf("load", "bad input %d", 3)
    with pytest.raises(ContextError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "[load] bad input 3"


def test_log_println(caplog):
    with caplog.at_level(logging.INFO, logger="prpolicy"):
        log_println("test", "test value: %v", "TEST")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["[test] test value: TEST"]


def test_sprintf():
    assert sprintf("test", "test value: %v", "TEST") == "[test] test value: TEST"


def test_sprint():
    assert sprint("test", "testing") == "[test] testing"


def test_sprintf_percent_escape_and_bool():
    assert sprintf("c", "100%% %v", True) == "[c] 100% true"


def test_sprintf_missing_argument():
    assert sprintf("c", "value %v") == "[c] value %!v(MISSING)"


def test_sprintf_quoted_list():
    assert sprintf("c", "%q", ["a", "b"]) == '[c] ["a" "b"]'