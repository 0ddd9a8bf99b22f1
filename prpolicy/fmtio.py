"""Context-tagged formatting, errors and log lines using printf-style verbs."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterator

_LOGGER = logging.getLogger("prpolicy")

_VERB = re.compile(r"%([+#]?)([%vsdqtf])")


class ContextError(Exception):
    """An error whose message is prefixed with the context it came from."""

    def __init__(self, context: str, message: str) -> None:
        super().__init__(f"[{context}] {message}")
        self.context = context
        self.message = message


def _render_plain(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_render_plain(item) for item in value) + "]"
    if isinstance(value, dict):
        pairs = " ".join(f"{_render_plain(k)}:{_render_plain(v)}" for k, v in value.items())
        return f"map[{pairs}]"
    return str(value)


def _render_quoted(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_render_quoted(item) for item in value) + "]"
    if isinstance(value, dict):
        pairs = " ".join(f"{_render_quoted(k)}:{_render_quoted(v)}" for k, v in value.items())
        return f"map[{pairs}]"
    return json.dumps(_render_plain(value))


def _render(verb: str, value: Any) -> str:
    if verb == "q":
        return _render_quoted(value)
    if verb == "d":
        return str(int(value))
    if verb == "f":
        return f"{float(value):f}"
    if verb == "t":
        return "true" if value else "false"
    return _render_plain(value)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    """Expand %v, %s, %d, %q, %t, %f and %% in ``fmt`` with ``args``."""
    remaining: Iterator[Any] = iter(args)

    def substitute(match: re.Match[str]) -> str:
        verb = match.group(2)
        if verb == "%":
            return "%"
        try:
            value = next(remaining)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        return _render(verb, value)

    text = _VERB.sub(substitute, fmt)
    extra = list(remaining)
    if extra:
        described = ", ".join(f"{type(item).__name__}={_render_plain(item)}" for item in extra)
        text += f"%!(EXTRA {described})"
    return text


def errorf(context: str, fmt: str, *args: Any) -> ContextError:
    """Build a ContextError whose message is ``fmt`` expanded with ``args``."""
    return ContextError(context, _format(fmt, args))


def log_println(context: str, fmt: str, *args: Any) -> None:
    """Log a context-tagged line at INFO level."""
    _LOGGER.info("[%s] %s", context, _format(fmt, args))


def sprintf(context: str, fmt: str, *args: Any) -> str:
    """Return ``fmt`` expanded with ``args`` and prefixed with ``[context]``."""
    return f"[{context}] {_format(fmt, args)}"


def sprint(context: str, value: Any) -> str:
    """Return ``value`` prefixed with ``[context]``."""
    return f"[{context}] {_render_plain(value)}"