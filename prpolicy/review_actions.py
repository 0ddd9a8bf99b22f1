"""Built-in actions that label a pull request and request people to look at it."""

from __future__ import annotations

import logging
from typing import Any

from .env import Env, internal_label_id
from .github import (
    get_issues_available_assignees,
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
    get_pull_request_reviewers,
)
from .utils import generate_random

_LOGGER = logging.getLogger("prpolicy")

MAX_ASSIGNEES = 10


class ActionError(Exception):
    """Raised when an action is given arguments it cannot work with."""


def _coordinates(env: Env) -> tuple[str, str, int]:
    pull_request = env.pull_request
    return (
        get_pull_request_owner_name(pull_request),
        get_pull_request_repo_name(pull_request),
        get_pull_request_number(pull_request),
    )


def _login(user: Any) -> str:
    return (user or {}).get("login") or ""


def add_label(env: Env, label_id: str) -> None:
    """Add the label known as ``label_id`` to the pull request."""
    owner, repo, number = _coordinates(env)
    key = internal_label_id(label_id)
    if key in env.register_map:
        label_name = env.register_map[key]
    else:
        label_name = label_id
        _LOGGER.warning("[warn]: addLabel %s was not found in the environment", label_id)
    env.client.post(f"/repos/{owner}/{repo}/issues/{number}/labels", [label_name])


def assign_assignees(env: Env, assignees: list[str]) -> None:
    """Assign between one and ten users to the pull request."""
    if not assignees:
        raise ActionError("assignAssignees: list of assignees can't be empty")
    if len(assignees) > MAX_ASSIGNEES:
        raise ActionError("assignAssignees: can only assign up to 10 assignees")
    owner, repo, number = _coordinates(env)
    env.client.post(
        f"/repos/{owner}/{repo}/issues/{number}/assignees",
        {"assignees": list(assignees)},
    )


def assign_random_reviewer(env: Env) -> None:
    """Request a review from one random assignable user other than the author.

    Does nothing when the pull request already has requested user reviewers.
    """
    owner, repo, number = _coordinates(env)
    requested = get_pull_request_reviewers(env.client, owner, repo, number)
    if requested["users"]:
        return

    author = _login(env.pull_request.get("user"))
    candidates = [
        user
        for user in get_issues_available_assignees(env.client, owner, repo)
        if _login(user) != author
    ]
    if not candidates:
        raise ActionError("can't assign a random user because there is no users")

    chosen = candidates[generate_random(len(candidates))]
    env.client.post(
        f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
        {"reviewers": [_login(chosen)]},
    )


def assign_reviewer(env: Env, reviewers: list[str], total_required: int) -> None:
    """Request reviews from ``total_required`` people picked from ``reviewers``.

    The author is never picked. People from the list who already reviewed are
    requested again and count towards the total; people already requested
    count towards it without a new request. The rest are picked at random.
    """
    if total_required == 0:
        raise ActionError("assignReviewer: total required reviewers can't be 0")
    if not reviewers:
        raise ActionError("assignReviewer: list of reviewers can't be empty")

    available = list(reviewers)
    author = _login(env.pull_request.get("user"))
    if author in available:
        available.remove(author)

    if total_required > len(available):
        _LOGGER.info(
            "assignReviewer: total required reviewers %s exceeds the total available reviewers %s",
            total_required,
            len(available),
        )
        total_required = len(available)

    owner, repo, number = _coordinates(env)
    selected: list[str] = []

    reviews = env.client.get(f"/repos/{owner}/{repo}/pulls/{number}/reviews").json() or []
    for review in reviews:
        login = _login(review.get("user"))
        if login in available:
            total_required -= 1
            selected.append(login)
            available.remove(login)

    for requested in env.pull_request.get("requested_reviewers") or []:
        login = _login(requested)
        if login in available:
            total_required -= 1
            available.remove(login)

    for _ in range(total_required):
        selected.append(available.pop(generate_random(len(available))))

    if not selected:
        _LOGGER.info("assignReviewer: skipping request reviewers. the pull request already has reviewers")
        return

    env.client.post(
        f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
        {"reviewers": selected},
    )


def assign_team_reviewer(env: Env, teams: list[str]) -> None:
    """Request reviews from the teams with the given slugs."""
    if not teams:
        raise ActionError("assignTeamReviewer: requires at least 1 team to request for review")
    owner, repo, number = _coordinates(env)
    env.client.post(
        f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
        {"team_reviewers": list(teams)},
    )