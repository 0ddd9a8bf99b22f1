"""The table of built-in functions and actions available to policies."""

from __future__ import annotations

from . import pull_request_actions as pr_actions
from . import pull_request_functions as pr_functions
from . import query_functions as queries
from . import review_actions
from .env import BuiltInAction, BuiltInFunction, BuiltIns

_STRING = "string"
_INT = "int"
_BOOL = "bool"
_STRINGS = "[]string"
_PREDICATE = "func(string) bool"


def _fn(code, parameters, returns) -> BuiltInFunction:
    return BuiltInFunction(code=code, parameters=tuple(parameters), returns=returns)


def _action(code, parameters) -> BuiltInAction:
    return BuiltInAction(code=code, parameters=tuple(parameters))


def plugin_builtins() -> BuiltIns:
    """Every built-in function and action, keyed by the name policies use."""
    functions = {
        # Pull request
        "assignees": _fn(pr_functions.assignees, (), _STRINGS),
        "author": _fn(pr_functions.author, (), _STRING),
        "base": _fn(pr_functions.base, (), _STRING),
        "commentCount": _fn(pr_functions.comment_count, (), _INT),
        "comments": _fn(pr_functions.comments, (), _STRINGS),
        "commitCount": _fn(pr_functions.commit_count, (), _INT),
        "commits": _fn(pr_functions.commits, (), _STRINGS),
        "createdAt": _fn(pr_functions.created_at, (), _INT),
        "description": _fn(pr_functions.description, (), _STRING),
        "fileCount": _fn(pr_functions.file_count, (), _INT),
        "hasFileExtensions": _fn(queries.has_file_extensions, (_STRINGS,), _BOOL),
        "hasFileName": _fn(queries.has_file_name, (_STRING,), _BOOL),
        "hasFilePattern": _fn(queries.has_file_pattern, (_STRING,), _BOOL),
        "hasLinearHistory": _fn(queries.has_linear_history, (), _BOOL),
        "hasLinkedIssues": _fn(queries.has_linked_issues, (), _BOOL),
        "head": _fn(pr_functions.head, (), _STRING),
        "isDraft": _fn(pr_functions.is_draft, (), _BOOL),
        "labels": _fn(pr_functions.labels, (), _STRINGS),
        "milestone": _fn(pr_functions.milestone, (), _STRING),
        "reviewers": _fn(pr_functions.reviewers, (), _STRINGS),
        "size": _fn(pr_functions.size, (), _INT),
        "title": _fn(pr_functions.title, (), _STRING),
        # Organization
        "organization": _fn(queries.organization, (), _STRINGS),
        "team": _fn(queries.team, (_STRING,), _STRINGS),
        # User
        "totalCreatedPullRequests": _fn(queries.total_created_pull_requests, (_STRING,), _INT),
        # Utilities
        "append": _fn(queries.append_strings, (_STRINGS, _STRINGS), _STRINGS),
        "contains": _fn(queries.contains, (_STRING, _STRING), _BOOL),
        "isElementOf": _fn(queries.is_element_of, (_STRING, _STRINGS), _BOOL),
        "startsWith": _fn(queries.starts_with, (_STRING, _STRING), _BOOL),
        # Engine
        "group": _fn(queries.group, (_STRING,), _STRINGS),
        # Internal
        "filter": _fn(queries.filter_strings, (_STRINGS, _PREDICATE), _STRINGS),
    }
    actions = {
        "addLabel": _action(review_actions.add_label, (_STRING,)),
        "assignAssignees": _action(review_actions.assign_assignees, (_STRINGS,)),
        "assignRandomReviewer": _action(review_actions.assign_random_reviewer, ()),
        "assignReviewer": _action(review_actions.assign_reviewer, (_STRINGS, _INT)),
        "assignTeamReviewer": _action(review_actions.assign_team_reviewer, (_STRINGS,)),
        "close": _action(pr_actions.close, ()),
        "comment": _action(pr_actions.comment, (_STRING,)),
        "commentOnce": _action(pr_actions.comment_once, (_STRING,)),
        "fail": _action(pr_actions.fail, (_STRING,)),
        "merge": _action(pr_actions.merge, (_STRING,)),
        "removeLabel": _action(pr_actions.remove_label, (_STRING,)),
    }
    return BuiltIns(functions=functions, actions=actions)