"""A small GitHub REST/GraphQL client and pull request helpers."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Optional, TypeVar
from urllib.parse import parse_qs, urlsplit

import requests

MAX_PER_PAGE = 100

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL = re.compile(r"[+-]?\d+")

T = TypeVar("T")


class GitHubError(Exception):
    """Raised when the GitHub API answers with an error."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class GitHubClient:
    """Thin wrapper over a requests session pointed at a GitHub API root."""

    def __init__(
        self,
        token: Optional[str],
        base_url: str,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers.setdefault("Accept", "application/vnd.github+json")
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        payload: Any = None,
    ) -> requests.Response:
        response = self.session.request(
            method, f"{self.base_url}{path}", params=params, json=payload
        )
        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("message", response.text) if isinstance(body, dict) else response.text
            except ValueError:
                message = response.text
            raise GitHubError(response.status_code, message)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        """GET ``path``; the response is returned so its headers can be read."""
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: Any = None) -> Any:
        """POST ``payload`` as JSON and return the decoded body."""
        return self._decode(self._request("POST", path, payload=payload))

    def patch(self, path: str, payload: Any = None) -> Any:
        """PATCH ``payload`` as JSON and return the decoded body."""
        return self._decode(self._request("PATCH", path, payload=payload))

    def put(self, path: str, payload: Any = None) -> Any:
        """PUT ``payload`` as JSON and return the decoded body."""
        return self._decode(self._request("PUT", path, payload=payload))

    def delete(self, path: str) -> Any:
        """DELETE ``path`` and return the decoded body, if any."""
        return self._decode(self._request("DELETE", path))

    def graphql(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` member."""
        response = self._request(
            "POST", "/graphql", payload={"query": query, "variables": variables or {}}
        )
        body = response.json()
        errors = body.get("errors")
        if errors:
            raise GitHubError(
                response.status_code,
                "; ".join(str(item.get("message", "")) for item in errors),
            )
        return body.get("data") or {}


def _base_repo(pull_request: dict[str, Any]) -> dict[str, Any]:
    return ((pull_request.get("base") or {}).get("repo")) or {}


def get_pull_request_owner_name(pull_request: dict[str, Any]) -> str:
    """Login of the owner of the pull request's base repository."""
    return (_base_repo(pull_request).get("owner") or {}).get("login") or ""


def get_pull_request_repo_name(pull_request: dict[str, Any]) -> str:
    """Name of the pull request's base repository."""
    return _base_repo(pull_request).get("name") or ""


def get_pull_request_number(pull_request: dict[str, Any]) -> int:
    """Number of the pull request."""
    return pull_request.get("number") or 0


def paginated_request(
    initial: T,
    fetch: Callable[[T, int], tuple[T, Any]],
) -> T:
    """Accumulate every page; ``fetch(acc, page)`` returns ``(acc, response)``."""
    results, response = fetch(initial, 1)
    num_pages = parse_num_pages(response)
    for page in range(2, num_pages + 1):
        results, _ = fetch(results, page)
    return results


def parse_num_pages_from_link(link: str) -> int:
    """Page number of the ``rel="last"`` entry of a Link header, or 0."""
    last = [entry for entry in requests.utils.parse_header_links(link) if entry.get("rel") == "last"]
    if not last:
        return 0
    try:
        query = urlsplit(last[0].get("url", "")).query
    except ValueError:
        return 0
    pages = parse_qs(query).get("page")
    if not pages or not pages[0]:
        return 0
    text = pages[0]
    if not _DECIMAL.fullmatch(text):
        return 0
    number = int(text)
    return number if _INT32_MIN <= number <= _INT32_MAX else 0


def parse_num_pages(response: Any) -> int:
    """Total number of pages announced by a response's Link header."""
    link = response.headers.get("Link") or ""
    if not link.strip(" "):
        return 0
    return parse_num_pages_from_link(link)


def _page_params(page: int) -> dict[str, int]:
    return {"page": page, "per_page": MAX_PER_PAGE}


def _collect_list(client: GitHubClient, path: str) -> list[dict[str, Any]]:
    def fetch(acc: list[dict[str, Any]], page: int) -> tuple[list[dict[str, Any]], requests.Response]:
        response = client.get(path, params=_page_params(page))
        return acc + (response.json() or []), response

    return paginated_request([], fetch)


def get_pull_request_comments(client: GitHubClient, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
    """All issue comments of a pull request."""
    return _collect_list(client, f"/repos/{owner}/{repo}/issues/{number}/comments")


def get_pull_request_files(client: GitHubClient, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
    """All files changed by a pull request."""
    return _collect_list(client, f"/repos/{owner}/{repo}/pulls/{number}/files")


def get_pull_request_reviewers(client: GitHubClient, owner: str, repo: str, number: int) -> dict[str, list[dict[str, Any]]]:
    """Requested reviewers of a pull request as ``{"users": [...], "teams": [...]}``."""
    path = f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers"

    def fetch(acc: dict[str, list[dict[str, Any]]], page: int):
        response = client.get(path, params=_page_params(page))
        body = response.json() or {}
        merged = {
            "users": acc["users"] + (body.get("users") or []),
            "teams": acc["teams"] + (body.get("teams") or []),
        }
        return merged, response

    return paginated_request({"users": [], "teams": []}, fetch)


def get_repo_collaborators(client: GitHubClient, owner: str, repo: str) -> list[dict[str, Any]]:
    """All collaborators of a repository."""
    return _collect_list(client, f"/repos/{owner}/{repo}/collaborators")


def get_issues_available_assignees(client: GitHubClient, owner: str, repo: str) -> list[dict[str, Any]]:
    """All users that can be assigned to issues of a repository."""
    return _collect_list(client, f"/repos/{owner}/{repo}/assignees")


def get_pull_request_commits(client: GitHubClient, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
    """All commits of a pull request."""
    return _collect_list(client, f"/repos/{owner}/{repo}/pulls/{number}/commits")