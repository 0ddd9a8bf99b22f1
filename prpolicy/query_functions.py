"""Built-in functions for string queries, changed-file checks and repository lookups."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

from .env import Env
from .fmtio import _format
from .github import (
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
)
from .utils import file_ext

_BAD_PATTERN = "syntax error in pattern"

_LINKED_ISSUES_QUERY = """
query($repositoryOwner: String!, $repositoryName: String!, $pullRequestNumber: Int!) {
  repository(owner: $repositoryOwner, name: $repositoryName) {
    pullRequest(number: $pullRequestNumber) {
      closingIssuesReferences {
        totalCount
      }
    }
  }
}
"""


def _coordinates(env: Env) -> tuple[str, str, int]:
    pull_request = env.pull_request
    return (
        get_pull_request_owner_name(pull_request),
        get_pull_request_repo_name(pull_request),
        get_pull_request_number(pull_request),
    )


def _head_owner(env: Env) -> str:
    return env.pull_request["head"]["repo"]["owner"]["login"]


def append_strings(env: Env, first: list[str], second: list[str]) -> list[str]:
    """A new list holding ``first`` followed by ``second``."""
    return [*first, *second]


def contains(env: Env, text: str, substring: str) -> bool:
    """Whether ``substring`` occurs in ``text``."""
    return substring in text


def filter_strings(env: Env, values: Iterable[str], predicate: Callable[[str], bool]) -> list[str]:
    """The values for which ``predicate`` holds, in order."""
    return [value for value in values if predicate(value)]


def group(env: Env, name: str) -> Any:
    """The members of the group registered under ``name``."""
    try:
        return env.register_map[name]
    except KeyError:
        raise LookupError(
            _format("getGroup: no group with name %v in state %+q", (name, env.register_map))
        ) from None


def has_file_extensions(env: Env, extensions: Iterable[str]) -> bool:
    """Whether every changed file has one of ``extensions`` (case-insensitive)."""
    allowed = {extension.lower() for extension in extensions}
    return all(file_ext(path).lower() in allowed for path in env.patch)


def has_file_name(env: Env, name: str) -> bool:
    """Whether a changed file has exactly the path ``name``."""
    return name in env.patch


def _char_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression opening at ``start``; return regex and next index."""
    n = len(pattern)
    pos = start + 1
    negate = pos < n and pattern[pos] in "^!"
    if negate:
        pos += 1

    def read_char(at: int) -> tuple[str, int]:
        if at >= n:
            raise ValueError(_BAD_PATTERN)
        if pattern[at] == "\\":
            at += 1
            if at >= n:
                raise ValueError(_BAD_PATTERN)
        return pattern[at], at + 1

    parts: list[str] = []
    while True:
        if pos >= n:
            raise ValueError(_BAD_PATTERN)
        if pattern[pos] == "]":
            if not parts:
                raise ValueError(_BAD_PATTERN)
            pos += 1
            break
        low, pos = read_char(pos)
        if pos + 1 < n and pattern[pos] == "-" and pattern[pos + 1] != "]":
            high, pos = read_char(pos + 1)
            if low > high:
                raise ValueError(_BAD_PATTERN)
            parts.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            parts.append(re.escape(low))
    body = "".join(parts)
    return (f"[^/{body}]" if negate else f"[{body}]"), pos


def _translate(pattern: str) -> str:
    """Translate a glob with ``**``, ``*``, ``?``, classes and braces into a regex."""
    tokens: list[str] = []
    depth = 0
    n = len(pattern)
    pos = 0
    while pos < n:
        char = pattern[pos]
        if char == "*":
            end = pos
            while end < n and pattern[end] == "*":
                end += 1
            whole_segment = (pos == 0 or pattern[pos - 1] == "/") and (end == n or pattern[end] == "/")
            if end - pos >= 2 and whole_segment:
                if end == n:
                    if tokens and tokens[-1] == "/":
                        tokens.pop()
                        tokens.append("(?:/.*)?")
                    else:
                        tokens.append(".*")
                else:
                    tokens.append("(?:.*/)?")
                    end += 1
            else:
                tokens.append("[^/]*")
            pos = end
        elif char == "?":
            tokens.append("[^/]")
            pos += 1
        elif char == "[":
            token, pos = _char_class(pattern, pos)
            tokens.append(token)
        elif char == "{":
            depth += 1
            tokens.append("(?:")
            pos += 1
        elif char == "," and depth > 0:
            tokens.append("|")
            pos += 1
        elif char == "}" and depth > 0:
            depth -= 1
            tokens.append(")")
            pos += 1
        elif char == "\\":
            if pos + 1 >= n:
                raise ValueError(_BAD_PATTERN)
            tokens.append(re.escape(pattern[pos + 1]))
            pos += 2
        else:
            tokens.append(re.escape(char))
            pos += 1
    if depth:
        raise ValueError(_BAD_PATTERN)
    return "".join(tokens)


def match_pattern(pattern: str, path: str) -> bool:
    """Whether ``path`` matches the glob ``pattern``; ``**`` spans directories.

    Raises ValueError when the pattern is malformed.
    """
    return re.fullmatch(_translate(pattern), path, re.DOTALL) is not None


def has_file_pattern(env: Env, pattern: str) -> bool:
    """Whether some changed file's path matches the glob ``pattern``."""
    return any(match_pattern(pattern, path) for path in env.patch)


def has_linear_history(env: Env) -> bool:
    """Whether no commit of the pull request is a merge commit."""
    owner, repo, number = _coordinates(env)
    commits = env.client.get(f"/repos/{owner}/{repo}/pulls/{number}/commits").json() or []
    return all(len(commit.get("parents") or []) <= 1 for commit in commits)


def has_linked_issues(env: Env) -> bool:
    """Whether the pull request references issues it would close."""
    owner, repo, number = _coordinates(env)
    data = env.client.graphql(
        _LINKED_ISSUES_QUERY,
        {
            "repositoryOwner": owner,
            "repositoryName": repo,
            "pullRequestNumber": number,
        },
    )
    repository = data.get("repository") or {}
    pull_request = repository.get("pullRequest") or {}
    references = pull_request.get("closingIssuesReferences") or {}
    return (references.get("totalCount") or 0) > 0


def is_element_of(env: Env, member: str, group: Iterable[str]) -> bool:
    """Whether ``member`` is one of ``group``."""
    return member in group


def organization(env: Env) -> list[str]:
    """Logins of the members of the organization owning the head repository."""
    members = env.client.get(f"/orgs/{_head_owner(env)}/members").json() or []
    return [member["login"] for member in members]


def starts_with(env: Env, text: str, prefix: str) -> bool:
    """Whether ``text`` begins with ``prefix``."""
    return text.startswith(prefix)


def team(env: Env, slug: str) -> list[str]:
    """Logins of the members of team ``slug`` in the head repository's organization."""
    members = env.client.get(f"/orgs/{_head_owner(env)}/teams/{slug}/members").json() or []
    return [member["login"] for member in members]


def total_created_pull_requests(env: Env, developer: str) -> int:
    """Number of pull requests, in any state, that ``developer`` opened in the repository."""
    owner, repo, _ = _coordinates(env)
    issues = env.client.get(
        f"/repos/{owner}/{repo}/issues",
        params={"creator": developer, "state": "all"},
    ).json() or []
    return sum(1 for issue in issues if issue.get("pull_request") is not None)