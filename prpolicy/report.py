"""User-facing error reports."""

from __future__ import annotations

from typing import Any

from .fmtio import _format


def error(fmt: str, *args: Any) -> str:
    """Return an error report with ``fmt`` expanded with ``args`` as details."""
    return f"Error occurred! Details:\n{_format(fmt, args)}"