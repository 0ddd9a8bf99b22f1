"""Built-in functions that read facts about the pull request under review."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .env import Env
from .github import (
    get_pull_request_comments,
    get_pull_request_commits,
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
)

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _coordinates(env: Env) -> tuple[str, str, int]:
    pull_request = env.pull_request
    return (
        get_pull_request_owner_name(pull_request),
        get_pull_request_repo_name(pull_request),
        get_pull_request_number(pull_request),
    )


def _login(user: Any) -> str:
    return (user or {}).get("login") or ""


def _parse_timestamp(text: str) -> datetime:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def assignees(env: Env) -> list[str]:
    """Logins of the users assigned to the pull request."""
    return [_login(user) for user in env.pull_request.get("assignees") or []]


def author(env: Env) -> str:
    """Login of the pull request's author."""
    return _login(env.pull_request.get("user"))


def base(env: Env) -> str:
    """Name of the branch the pull request targets."""
    return (env.pull_request.get("base") or {}).get("ref") or ""


def comment_count(env: Env) -> int:
    """Number of comments on the pull request, as reported by the API."""
    return env.pull_request["comments"]


def comments(env: Env) -> list[str]:
    """Bodies of every issue comment on the pull request."""
    owner, repo, number = _coordinates(env)
    return [
        comment.get("body") or ""
        for comment in get_pull_request_comments(env.client, owner, repo, number)
    ]


def commit_count(env: Env) -> int:
    """Number of commits in the pull request, as reported by the API."""
    return env.pull_request["commits"]


def commits(env: Env) -> list[str]:
    """Messages of every commit in the pull request."""
    owner, repo, number = _coordinates(env)
    return [
        (entry.get("commit") or {}).get("message") or ""
        for entry in get_pull_request_commits(env.client, owner, repo, number)
    ]


def created_at(env: Env) -> int:
    """Creation time of the pull request in Unix seconds."""
    text = env.pull_request.get("created_at")
    moment = _parse_timestamp(text) if text else _ZERO_TIME
    return int(moment.timestamp())


def description(env: Env) -> str:
    """Body text of the pull request."""
    return env.pull_request.get("body") or ""


def file_count(env: Env) -> int:
    """Number of files changed by the pull request."""
    return len(env.patch)


def head(env: Env) -> str:
    """Name of the branch the pull request comes from."""
    return (env.pull_request.get("head") or {}).get("ref") or ""


def is_draft(env: Env) -> bool:
    """Whether the pull request is a draft."""
    if env.pull_request is None:
        raise ValueError("isDraft: pull request is nil")
    return bool(env.pull_request.get("draft"))


def labels(env: Env) -> list[str]:
    """Names of the labels on the pull request."""
    return [(label or {}).get("name") or "" for label in env.pull_request.get("labels") or []]


def milestone(env: Env) -> str:
    """Title of the pull request's milestone, or an empty string."""
    return (env.pull_request.get("milestone") or {}).get("title") or ""


def reviewers(env: Env) -> list[str]:
    """Logins of requested user reviewers followed by slugs of requested teams."""
    users = [_login(user) for user in env.pull_request.get("requested_reviewers") or []]
    teams = [(team or {}).get("slug") or "" for team in env.pull_request.get("requested_teams") or []]
    return users + teams


def size(env: Env) -> int:
    """Lines added plus lines deleted by the pull request."""
    return (env.pull_request.get("additions") or 0) + (env.pull_request.get("deletions") or 0)


def title(env: Env) -> str:
    """Title of the pull request."""
    return env.pull_request.get("title") or ""