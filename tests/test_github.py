import json

import pytest
import responses
from responses import matchers

from prpolicy.github import (
    GitHubClient,
    GitHubError,
    get_issues_available_assignees,
    get_pull_request_comments,
    get_pull_request_commits,
    get_pull_request_files,
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
    get_pull_request_reviewers,
    get_repo_collaborators,
    paginated_request,
    parse_num_pages,
    parse_num_pages_from_link,
)

API = "https://api.example.com"
OWNER = "john"
REPO = "default-mock-repo"
NUMBER = 6


def mock_pull_request():
    return {
        "number": NUMBER,
        "base": {"ref": "master", "repo": {"name": REPO, "owner": {"login": OWNER}}},
    }


@pytest.fixture
def client():
    return GitHubClient("token", API)


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


class FakeResponse:
    def __init__(self, link=""):
        self.headers = {"Link": link} if link else {}


def test_get_pull_request_owner_name():
    assert get_pull_request_owner_name(mock_pull_request()) == OWNER


def test_get_pull_request_repo_name():
    assert get_pull_request_repo_name(mock_pull_request()) == REPO


def test_get_pull_request_number():
    assert get_pull_request_number(mock_pull_request()) == NUMBER


def test_pull_request_accessors_on_empty_pull_request():
    assert get_pull_request_owner_name({}) == ""
    assert get_pull_request_repo_name({}) == ""
    assert get_pull_request_number({}) == 0


def test_parse_num_pages_from_link_reads_last_page():
    link = (
        f'<{API}/items?page=2&per_page=100>; rel="next", '
        f'<{API}/items?page=7&per_page=100>; rel="last"'
    )
    assert parse_num_pages_from_link(link) == 7


@pytest.mark.parametrize(
    "link",
    [
        f'<{API}/items?page=2>; rel="next"',
        f'<{API}/items?per_page=100>; rel="last"',
        f'<{API}/items?page=abc>; rel="last"',
        f'<{API}/items?page=99999999999>; rel="last"',
    ],
)
def test_parse_num_pages_from_link_invalid(link):
    assert parse_num_pages_from_link(link) == 0


def test_parse_num_pages_without_link_header():
    assert parse_num_pages(FakeResponse()) == 0
    assert parse_num_pages(FakeResponse("   ")) == 0


def test_paginated_request_visits_every_page():
    link = f'<{API}/items?page=3>; rel="last"'
    seen = []

    def fetch(acc, page):
        seen.append(page)
        return acc + [page], FakeResponse(link)

    assert paginated_request([], fetch) == [1, 2, 3]
    assert seen == [1, 2, 3]


def test_paginated_request_single_page():
    result = paginated_request(["x"], lambda acc, page: (acc + [page], FakeResponse()))
    assert result == ["x", 1]


def test_get_pull_request_files_follows_pagination(client, rsps):
    url = f"{API}/repos/{OWNER}/{REPO}/pulls/{NUMBER}/files"
    link = f'<{url}?page=2&per_page=100>; rel="next", <{url}?page=2&per_page=100>; rel="last"'
    rsps.add(
        responses.GET,
        url,
        json=[{"filename": "a.go"}],
        headers={"Link": link},
        match=[matchers.query_param_matcher({"page": "1", "per_page": "100"})],
    )
    rsps.add(
        responses.GET,
        url,
        json=[{"filename": "b.go"}],
        match=[matchers.query_param_matcher({"page": "2", "per_page": "100"})],
    )
    files = get_pull_request_files(client, OWNER, REPO, NUMBER)
    assert [f["filename"] for f in files] == ["a.go", "b.go"]


def test_get_pull_request_comments(client, rsps):
    rsps.add(
        responses.GET,
        f"{API}/repos/{OWNER}/{REPO}/issues/{NUMBER}/comments",
        json=[{"body": "hello world"}],
    )
    comments = get_pull_request_comments(client, OWNER, REPO, NUMBER)
    assert [c["body"] for c in comments] == ["hello world"]
    assert rsps.calls[0].request.headers["Authorization"] == "Bearer token"


def test_get_pull_request_comments_error(client, rsps):
    rsps.add(
        responses.GET,
        f"{API}/repos/{OWNER}/{REPO}/issues/{NUMBER}/comments",
        json={"message": "GetCommentsRequestFailed"},
        status=500,
    )
    with pytest.raises(GitHubError) as info:
        get_pull_request_comments(client, OWNER, REPO, NUMBER)
    assert info.value.message == "GetCommentsRequestFailed"
    assert info.value.status == 500


def test_get_pull_request_reviewers(client, rsps):
    rsps.add(
        responses.GET,
        f"{API}/repos/{OWNER}/{REPO}/pulls/{NUMBER}/requested_reviewers",
        json={"users": [{"login": "jane"}], "teams": [{"slug": "core"}]},
    )
    reviewers = get_pull_request_reviewers(client, OWNER, REPO, NUMBER)
    assert reviewers == {"users": [{"login": "jane"}], "teams": [{"slug": "core"}]}


def test_get_repo_collaborators_and_assignees(client, rsps):
    rsps.add(responses.GET, f"{API}/repos/{OWNER}/{REPO}/collaborators", json=[{"login": "mary"}])
    rsps.add(responses.GET, f"{API}/repos/{OWNER}/{REPO}/assignees", json=[{"login": "peter"}])
    assert get_repo_collaborators(client, OWNER, REPO) == [{"login": "mary"}]
    assert get_issues_available_assignees(client, OWNER, REPO) == [{"login": "peter"}]


def test_get_pull_request_commits(client, rsps):
    rsps.add(
        responses.GET,
        f"{API}/repos/{OWNER}/{REPO}/pulls/{NUMBER}/commits",
        json=[{"commit": {"message": "Lorem Ipsum"}}],
    )
    commits = get_pull_request_commits(client, OWNER, REPO, NUMBER)
    assert [c["commit"]["message"] for c in commits] == ["Lorem Ipsum"]


def test_post_sends_json_payload(client, rsps):
    url = f"{API}/repos/{OWNER}/{REPO}/issues/{NUMBER}/comments"
    rsps.add(responses.POST, url, json={"id": 1})
    assert client.post(f"/repos/{OWNER}/{REPO}/issues/{NUMBER}/comments", {"body": "hi"}) == {"id": 1}
    assert json.loads(rsps.calls[0].request.body) == {"body": "hi"}


def test_delete_with_empty_body(client, rsps):
    rsps.add(responses.DELETE, f"{API}/things/1", status=204)
    assert client.delete("/things/1") is None
    assert len(rsps.calls) == 1


def test_graphql_returns_data(client, rsps):
    rsps.add(responses.POST, f"{API}/graphql", json={"data": {"viewer": {"login": "john"}}})
    assert client.graphql("query { viewer { login } }", {"n": 1}) == {"viewer": {"login": "john"}}
    sent = json.loads(rsps.calls[0].request.body)
    assert sent["variables"] == {"n": 1}


def test_graphql_errors_raise(client, rsps):
    rsps.add(responses.POST, f"{API}/graphql", json={"errors": [{"message": "boom"}]})
    with pytest.raises(GitHubError, match="boom"):
        client.graphql("query { x }")