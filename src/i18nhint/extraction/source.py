"""Text-level helpers for JavaScript-like resource modules.

Resource modules are located and sliced textually before anything is
evaluated. All helpers here share one character scanner that knows where
string literals and comments begin and end, so braces, commas and colons inside
them are never mistaken for structure. Offsets always refer to the original
text.

Regular-expression literals are not recognized; a ``/'/`` in code is read as
the start of a string. Resource modules practically never contain them.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Literal, NamedTuple, TypeAlias

from i18nhint.diagnostics import Diagnostic, DiagnosticCode, ExtractionError

__all__ = [
    "Segment",
    "brace_depth_at",
    "enclosing_open",
    "find_closing",
    "iter_segments",
    "mask_comments",
    "neutralize_object",
    "neutralize_value",
    "split_members",
    "split_top_level",
]

SegmentKind: TypeAlias = Literal["code", "string", "comment"]

_QUOTES = "'\"`"
_OPENERS = "{[("
_CLOSERS = "}])"

_NUMBER_LITERAL_RE = re.compile(
    r"[-+]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\Z"
)
_KEYWORD_LITERALS = frozenset({"true", "false", "null", "undefined"})


class Segment(NamedTuple):
    """A run of code, one string literal, or one comment."""

    kind: SegmentKind
    start: int
    end: int


def _string_end(text: str, start: int) -> int:
    """Return the index just past the string literal opening at start.

    Unterminated quote or double-quote strings end at the line break, the way
    a JavaScript lexer would give up on them; template strings may span lines.
    """
    quote = text[start]
    length = len(text)
    i = start + 1
    while i < length:
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n" and quote != "`":
            return i
        i += 1
    return length


def iter_segments(text: str, start: int = 0, end: int | None = None) -> Iterator[Segment]:
    """Split text[start:end] into code, string and comment segments.

    Args:
        text: Source text
        start: Offset to begin scanning at
        end: Offset to stop at (default: end of text)

    Yields:
        Segments in order, covering the whole range without gaps
    """
    stop = len(text) if end is None else end
    i = start
    code_start = start
    while i < stop:
        char = text[i]
        kind: SegmentKind
        if char in _QUOTES:
            segment_end = _string_end(text, i)
            kind = "string"
        elif char == "/" and text.startswith("//", i):
            newline = text.find("\n", i)
            segment_end = len(text) if newline == -1 else newline
            kind = "comment"
        elif char == "/" and text.startswith("/*", i):
            closing = text.find("*/", i + 2)
            segment_end = len(text) if closing == -1 else closing + 2
            kind = "comment"
        else:
            i += 1
            continue
        if code_start < i:
            yield Segment("code", code_start, i)
        segment_end = min(segment_end, stop)
        yield Segment(kind, i, segment_end)
        i = code_start = segment_end
    if code_start < stop:
        yield Segment("code", code_start, stop)


def mask_comments(text: str) -> str:
    """Blank out comments, keeping every offset and line break in place.

    Example:
        >>> mask_comments("a = 1; // note")
        'a = 1;        '
    """
    parts: list[str] = []
    for segment in iter_segments(text):
        chunk = text[segment.start:segment.end]
        if segment.kind == "comment":
            chunk = re.sub(r"[^\n]", " ", chunk)
        parts.append(chunk)
    return "".join(parts)


def find_closing(text: str, open_index: int) -> int:
    """Find the bracket closing the one at open_index.

    Args:
        text: Source text
        open_index: Offset of an opening ``{``, ``[`` or ``(``

    Returns:
        Offset of the matching closing bracket

    Raises:
        ExtractionError: If open_index is not an opening bracket or the
            bracket is never closed
    """
    if open_index >= len(text) or text[open_index] not in _OPENERS:
        msg = f"No opening bracket at offset {open_index}"
        raise ExtractionError(msg)
    depth = 0
    for segment in iter_segments(text, open_index):
        if segment.kind != "code":
            continue
        for i in range(segment.start, segment.end):
            char = text[i]
            if char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return i
    raise ExtractionError(
        Diagnostic(
            code=DiagnosticCode.LITERAL_SYNTAX,
            message=f"Bracket opened at offset {open_index} is never closed",
        )
    )


def brace_depth_at(text: str, index: int) -> int:
    """Count brackets open at index, ignoring strings and comments."""
    depth = 0
    for segment in iter_segments(text, 0, index):
        if segment.kind != "code":
            continue
        for char in text[segment.start:segment.end]:
            if char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
    return depth


def enclosing_open(text: str, index: int) -> int | None:
    """Return the offset of the innermost bracket still open at index."""
    stack: list[int] = []
    for segment in iter_segments(text, 0, index):
        if segment.kind != "code":
            continue
        for i in range(segment.start, segment.end):
            char = text[i]
            if char in _OPENERS:
                stack.append(i)
            elif char in _CLOSERS and stack:
                stack.pop()
    return stack[-1] if stack else None


def split_top_level(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split text on a one-character separator outside brackets, strings and comments.

    Example:
        >>> split_top_level("a: f(1, 2), b: 'x,y'", ",")
        ['a: f(1, 2)', " b: 'x,y'"]
    """
    parts: list[str] = []
    depth = 0
    last = 0
    for segment in iter_segments(text):
        if segment.kind != "code":
            continue
        for i in range(segment.start, segment.end):
            char = text[i]
            if char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
            elif char == separator and depth == 0 and (maxsplit < 0 or len(parts) < maxsplit):
                parts.append(text[last:i])
                last = i + 1
    parts.append(text[last:])
    return parts


def split_members(literal: str) -> list[tuple[str, str | None]]:
    """Split an object literal into (key text, value text) pairs.

    Members without a colon (shorthand properties, spreads) get a value of
    None. Empty members, such as the one after a trailing comma, are skipped.

    Args:
        literal: Object literal text including its braces

    Returns:
        Stripped key and value texts in source order

    Raises:
        ExtractionError: If literal is not wrapped in braces
    """
    body = literal.strip()
    if not (body.startswith("{") and body.endswith("}")):
        msg = "Object literal must be wrapped in braces"
        raise ExtractionError(msg)
    members: list[tuple[str, str | None]] = []
    for part in split_top_level(body[1:-1], ","):
        if not mask_comments(part).strip():
            continue
        pieces = split_top_level(part, ":", maxsplit=1)
        if len(pieces) == 1:
            members.append((pieces[0].strip(), None))
        else:
            members.append((pieces[0].strip(), pieces[1].strip()))
    return members


def _conditional_branch(value: str) -> str | None:
    """Return the consequent of a top-level ``cond ? a : b``, if value is one."""
    masked = mask_comments(value)
    depth = 0
    for segment in iter_segments(masked):
        if segment.kind != "code":
            continue
        for i in range(segment.start, segment.end):
            char = masked[i]
            if char in _OPENERS:
                depth += 1
            elif char in _CLOSERS:
                depth -= 1
            elif char == "?" and depth == 0:
                following = masked[i + 1:i + 2]
                preceding = masked[i - 1:i]
                # Optional chaining (?.) and nullish coalescing (??) are not conditionals.
                if following in ("?", ".") or preceding == "?":
                    continue
                return split_top_level(value[i + 1:], ":", maxsplit=1)[0]
    return None


def _is_single_string(value: str) -> bool:
    segments = list(iter_segments(value))
    return (
        len(segments) == 1
        and segments[0].kind == "string"
        and value[-1:] == value[:1]
        and len(value) >= 2  # noqa: PLR2004 - opening and closing quote
    )


def neutralize_value(value: str) -> str:
    """Rewrite a member value into literal syntax.

    Literal values are kept as they are. A conditional expression is replaced
    by its first branch, nested objects are neutralized recursively, and
    everything else (helper calls, references, concatenations) becomes ``''``.

    Example:
        >>> neutralize_value("commonHM.label('x')")
        "''"
        >>> neutralize_value("isMac ? 'Cmd' : 'Ctrl'")
        "'Cmd'"
    """
    text = mask_comments(value).strip()
    if not text:
        return "''"
    branch = _conditional_branch(text)
    if branch is not None:
        return neutralize_value(branch)
    if _is_single_string(text):
        return "''" if text.startswith("`") and "${" in text else text
    if _NUMBER_LITERAL_RE.match(text) or text in _KEYWORD_LITERALS:
        return text
    if text.startswith("{") and text.endswith("}"):
        try:
            if find_closing(text, 0) == len(text) - 1:
                return neutralize_object(text)
        except ExtractionError:
            return "''"
    if text.startswith("[") and text.endswith("]"):
        return text
    return "''"


def neutralize_object(literal: str) -> str:
    """Rebuild an object literal with every value neutralized.

    Shorthand properties, spreads and computed keys are dropped, and so is any
    trailing comma.

    Example:
        >>> neutralize_object("{l0001: fmt('a'), l0002: 'b',}")
        "{l0001: '', l0002: 'b'}"
    """
    members = []
    for key, value in split_members(mask_comments(literal)):
        if value is None or not key or key.startswith("["):
            continue
        members.append(f"{key}: {neutralize_value(value)}")
    return "{" + ", ".join(members) + "}"
