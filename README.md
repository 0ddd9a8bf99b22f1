# prpolicy

`prpolicy` provides the built-in functions and actions that a pull request
policy needs when working against GitHub. Functions inspect a pull request:
its author, labels, changed files, commits and reviewers. Actions change it:
they add or remove labels, assign people, request reviewers, comment, merge
or close it.

## Installation

```
pip install prpolicy
```

Running the tests needs the `test` extra:

```
pip install "prpolicy[test]"
pytest
```

## Concepts

- `prpolicy.github.GitHubClient(token, base_url, session=None)` is a small
  REST and GraphQL client built on `requests`. `get` returns the
  `requests.Response` (so its `Link` header can be read for paging); `post`,
  `patch`, `put` and `delete` return the decoded JSON body; `graphql` returns
  the `data` member. A response with status 400 or above, or a GraphQL answer
  with errors, raises `prpolicy.github.GitHubError`, which carries `status`
  and `message`.
- `prpolicy.github` also has paging helpers: `get_pull_request_comments`,
  `get_pull_request_files`, `get_pull_request_reviewers`,
  `get_repo_collaborators`, `get_issues_available_assignees` and
  `get_pull_request_commits` fetch every page, 100 items at a time.
- `prpolicy.env.Env` holds everything a built-in sees: `client`,
  `pull_request` (the pull request as a JSON dict), `patch` (a dict keyed by
  the paths of the changed files) and `register_map` (named values such as
  groups, and label names stored under `internal_label_id(label)`).
- `prpolicy.registry.plugin_builtins()` returns a `BuiltIns` whose
  `functions` and `actions` dicts map policy names to `BuiltInFunction` and
  `BuiltInAction` objects. Each is called as `builtin(env, *args)`.

## Example

```python
from prpolicy.env import Env
from prpolicy.github import GitHubClient, get_pull_request_files
from prpolicy.registry import plugin_builtins

client = GitHubClient(token="token", base_url="https://github.example.com/api/v3")
pull_request = client.get("/repos/octo-org/octo-repo/pulls/42").json()
files = get_pull_request_files(client, "octo-org", "octo-repo", 42)

env = Env(
    client=client,
    pull_request=pull_request,
    patch={entry["filename"]: entry for entry in files},
    register_map={"maintainers": ["alice", "bob"]},
)
builtins = plugin_builtins()

if builtins.functions["size"](env) > 500:
    builtins.actions["addLabel"](env, "large")
    builtins.actions["commentOnce"](env, "This pull request is large; please consider splitting it.")

if builtins.functions["hasFilePattern"](env, "src/**/*.py"):
    builtins.actions["assignReviewer"](env, builtins.functions["group"](env, "maintainers"), 1)
```

Functions and actions can also be called straight from their modules:

```python
from prpolicy.pull_request_functions import author, labels
from prpolicy.query_functions import has_file_pattern, match_pattern

print(author(env), labels(env))
print(has_file_pattern(env, "src/**/*.py"))
print(match_pattern("docs/{*.md,*.rst}", "docs/index.md"))  # True
```

## Available built-ins

Functions (`prpolicy.pull_request_functions` and `prpolicy.query_functions`):
`assignees`, `author`, `base`, `commentCount`, `comments`, `commitCount`,
`commits`, `createdAt`, `description`, `fileCount`, `hasFileExtensions`,
`hasFileName`, `hasFilePattern`, `hasLinearHistory`, `hasLinkedIssues`,
`head`, `isDraft`, `labels`, `milestone`, `reviewers`, `size`, `title`,
`organization`, `team`, `totalCreatedPullRequests`, `append`, `contains`,
`isElementOf`, `startsWith`, `group`, `filter`.

Actions (`prpolicy.review_actions` and `prpolicy.pull_request_actions`):
`addLabel`, `assignAssignees`, `assignRandomReviewer`, `assignReviewer`,
`assignTeamReviewer`, `close`, `comment`, `commentOnce`, `fail`, `merge`,
`removeLabel`.

## Errors

- An action given arguments it cannot work with (no assignees, more than ten
  assignees, no teams, zero required reviewers, an unknown merge method, no
  candidate for a random reviewer) raises `prpolicy.review_actions.ActionError`.
- `fail` raises `prpolicy.pull_request_actions.PolicyFailure` with its message.
- `group` raises `LookupError` for an unknown group name; `hasFilePattern` and
  `match_pattern` raise `ValueError` for a malformed pattern.
- API failures raise `prpolicy.github.GitHubError`.

Warnings and notices are written to the standard `logging` logger named
`prpolicy`; the helpers in `prpolicy.fmtio` and `prpolicy.report` format
context-tagged messages and error reports.

## What this package does not do

`prpolicy` is a library of built-ins only. It does not read or check policy
files, has no expression language or interpreter, has no command-line program,
and does not run a policy from start to finish: the caller fetches the pull
request, fills in `Env` (including `patch` and `register_map`) and decides
which built-ins to call. There are no built-ins that evaluate named rules or
search the contents of a diff.