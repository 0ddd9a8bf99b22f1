"""Built-in actions that comment on, close, merge or unlabel a pull request."""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Optional
from urllib.parse import quote

from .env import Env, internal_label_id
from .github import (
    get_pull_request_comments,
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
)
from .review_actions import ActionError

_LOGGER = logging.getLogger("prpolicy")

COMMENT_ANNOTATION = "<!--@annotation-reviewpad-single-comment-->"
MERGE_COMMIT_MESSAGE = "Merged by Reviewpad"
MERGE_METHODS = ("merge", "rebase", "squash")
DEFAULT_MERGE_METHOD = "merge"


class PolicyFailure(Exception):
    """Raised by the ``fail`` action to stop the run with a message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _coordinates(env: Env) -> tuple[str, str, int]:
    pull_request = env.pull_request
    return (
        get_pull_request_owner_name(pull_request),
        get_pull_request_repo_name(pull_request),
        get_pull_request_number(pull_request),
    )


def _digest(text: str) -> bytes:
    return hashlib.sha256(text.encode("utf-8")).digest()


def close(env: Env) -> None:
    """Close the pull request."""
    owner, repo, number = _coordinates(env)
    pull_request = env.pull_request
    pull_request["state"] = "closed"
    update: dict[str, Any] = {
        "title": pull_request.get("title"),
        "body": pull_request.get("body"),
        "state": "closed",
        "base": (pull_request.get("base") or {}).get("ref"),
        "maintainer_can_modify": pull_request.get("maintainer_can_modify"),
    }
    payload = {key: value for key, value in update.items() if value is not None}
    env.client.patch(f"/repos/{owner}/{repo}/pulls/{number}", payload)


def comment(env: Env, body: str) -> None:
    """Post ``body`` as a comment on the pull request."""
    owner, repo, number = _coordinates(env)
    env.client.post(f"/repos/{owner}/{repo}/issues/{number}/comments", {"body": body})


def comment_once(env: Env, body: str) -> None:
    """Post ``body`` as an annotated comment unless the same one is already there."""
    owner, repo, number = _coordinates(env)
    annotated = f"{COMMENT_ANNOTATION}{body}"
    wanted = _digest(annotated)

    existing = get_pull_request_comments(env.client, owner, repo, number)
    if any(_digest(entry.get("body") or "") == wanted for entry in existing):
        return

    env.client.post(f"/repos/{owner}/{repo}/issues/{number}/comments", {"body": annotated})


def fail(env: Env, message: str) -> None:
    """Stop evaluation by raising PolicyFailure with ``message``."""
    _LOGGER.error(message)
    raise PolicyFailure(message)


def merge(env: Env, merge_method: Optional[str] = None) -> None:
    """Merge the pull request with ``merge``, ``rebase`` or ``squash`` (default ``merge``)."""
    owner, repo, number = _coordinates(env)
    method = DEFAULT_MERGE_METHOD if merge_method is None else merge_method
    if method not in MERGE_METHODS:
        raise ActionError(f"merge: unsupported merge method {method}")
    env.client.put(
        f"/repos/{owner}/{repo}/pulls/{number}/merge",
        {"commit_message": MERGE_COMMIT_MESSAGE, "merge_method": method},
    )


def remove_label(env: Env, label_id: str) -> None:
    """Remove the label known as ``label_id`` if the pull request carries it."""
    owner, repo, number = _coordinates(env)
    key = internal_label_id(label_id)
    if key in env.register_map:
        label_name = env.register_map[key]
    else:
        label_name = label_id
        _LOGGER.warning("[warn]: removeLabel %s was not found in the environment", label_id)

    applied = any(
        (label or {}).get("name") == label_name
        for label in env.pull_request.get("labels") or []
    )
    if not applied:
        return

    env.client.delete(
        f"/repos/{owner}/{repo}/issues/{number}/labels/{quote(label_name, safe='')}"
    )