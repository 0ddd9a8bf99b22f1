"""Evaluation environment and built-in function/action containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .github import GitHubClient

_INTERNAL_LABEL_PREFIX = "@label:"


def internal_label_id(label: str) -> str:
    """Key under which a label's display name is kept in the register map."""
    return f"{_INTERNAL_LABEL_PREFIX}{label}"


@dataclass
class Env:
    """What built-ins see: the API client, the pull request, its files and registers."""

    client: GitHubClient
    pull_request: dict[str, Any]
    patch: dict[str, Any] = field(default_factory=dict)
    register_map: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BuiltInFunction:
    """A built-in that computes a value from the environment and its arguments.

    ``parameters`` and ``returns`` name the types, e.g. ``"string"``,
    ``"int"``, ``"bool"``, ``"[]string"``.
    """

    code: Callable[..., Any]
    parameters: tuple[str, ...] = ()
    returns: Optional[str] = None

    def __call__(self, env: Env, *args: Any) -> Any:
        return self.code(env, *args)


@dataclass(frozen=True)
class BuiltInAction:
    """A built-in that acts on the pull request and returns nothing."""

    code: Callable[..., Any]
    parameters: tuple[str, ...] = ()

    def __call__(self, env: Env, *args: Any) -> None:
        self.code(env, *args)


@dataclass
class BuiltIns:
    """The named functions and actions available to policies."""

    functions: dict[str, BuiltInFunction] = field(default_factory=dict)
    actions: dict[str, BuiltInAction] = field(default_factory=dict)