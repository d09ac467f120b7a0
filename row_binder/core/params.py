"""Positional placeholder handling.

Statements are written with ``?`` placeholders. For drivers whose
paramstyle is ``format``/``pyformat`` they are converted to ``%s``.
String literals are left untouched in both conversion and diagnostics.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.|'')*'")

_PLACEHOLDER = "?"


def _split_literals(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_literal, text)`` segments."""
    parts: list[tuple[bool, str]] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append((False, sql[last_end:start]))
        parts.append((True, match.group()))
        last_end = end

    if last_end < len(sql):
        parts.append((False, sql[last_end:]))

    return parts


def normalize_placeholders(sql: str, paramstyle: str) -> str:
    """Convert ``?`` placeholders to the target param style.

    Args:
        sql: SQL string with ``?`` placeholders.
        paramstyle: DB-API paramstyle of the driver. ``qmark`` needs no
            conversion; ``format`` and ``pyformat`` get ``%s``.

    Returns:
        SQL with placeholders converted to the target style.
    """
    if paramstyle == "qmark":
        return sql
    return _convert_to_format(sql)


@lru_cache(maxsize=256)
def _convert_to_format(sql: str) -> str:
    """Convert ``?`` to ``%s``, escaping literal percent signs."""
    parts: list[str] = []
    for is_literal, text in _split_literals(sql):
        text = text.replace("%", "%%")
        if not is_literal:
            text = text.replace(_PLACEHOLDER, "%s")
        parts.append(text)
    return "".join(parts)


def render_value(value: Any) -> str:
    """Render *value* as an SQL literal for diagnostic output."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"X'{bytes(value).hex()}'"
    text = str(value).replace("'", "''")
    return f"'{text}'"


def interpolate(sql: str, args: Sequence[Any]) -> str:
    """Return *sql* with positional *args* substituted into its placeholders.

    Used for ``last_sql`` and the query log only. The result is never
    executed and is not safe to execute. Surplus arguments are appended
    after the statement; missing ones leave their placeholder in place.
    """
    if not args:
        return sql

    remaining = list(args)
    parts: list[str] = []
    for is_literal, text in _split_literals(sql):
        if is_literal or _PLACEHOLDER not in text:
            parts.append(text)
            continue
        pieces = text.split(_PLACEHOLDER)
        out = [pieces[0]]
        for piece in pieces[1:]:
            out.append(render_value(remaining.pop(0)) if remaining else _PLACEHOLDER)
            out.append(piece)
        parts.append("".join(out))

    rendered = "".join(parts)
    if remaining:
        extra = ", ".join(render_value(v) for v in remaining)
        rendered = f"{rendered} [extra: {extra}]"
    return rendered
