"""Shared helper utilities for analysis and emission."""

from __future__ import annotations

import re

_WORD_START = re.compile(r"(?:^\w|[A-Z]|\b\w)", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def to_pascal_case(value: str) -> str:
    """Upper-case every word start, then drop whitespace and hyphens.

    ``empty-state`` becomes ``EmptyState``; underscores are kept because they
    do not form a word boundary (``my_comp`` becomes ``My_comp``).
    """
    upper = _WORD_START.sub(lambda match: match.group(0).upper(), value)
    return _WHITESPACE.sub("", upper).replace("-", "")


def title_path(relative_path: str) -> str:
    """PascalCase every segment of a slash separated path."""
    return "/".join(to_pascal_case(segment) for segment in relative_path.split("/"))


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def quote_string_literal(raw: str) -> str:
    """Re-quote a TypeScript string literal token with double quotes."""
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"', "`"}:
        quote, inner = raw[0], raw[1:-1]
    else:
        quote, inner = '"', raw
    if quote != '"':
        inner = inner.replace(f"\\{quote}", quote)
        inner = re.sub(r'(?<!\\)"', r'\\"', inner)
    return f'"{inner}"'


def string_literal_value(raw: str) -> str:
    """Return the unquoted contents of a string literal token."""
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"', "`"}:
        return raw[1:-1]
    return raw


def normalise_number_literal(raw: str) -> str:
    """Render a numeric literal the way JavaScript prints its value."""
    text = raw.replace("_", "").strip()
    negative = text.startswith("-")
    if negative:
        text = text[1:].strip()
    try:
        value: float = int(text, 0)
    except ValueError:
        try:
            value = float(text)
        except ValueError:
            return raw.strip()
        if value.is_integer():
            value = int(value)
    rendered = repr(value)
    return f"-{rendered}" if negative else rendered


__all__ = [
    "is_identifier",
    "normalise_number_literal",
    "quote_string_literal",
    "string_literal_value",
    "title_path",
    "to_pascal_case",
]
