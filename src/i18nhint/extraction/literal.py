"""Structural evaluation of JavaScript object literals.

Turns the text of a literal (objects, arrays, strings, numbers, booleans,
null) into Python values without executing anything. Tokenization is done by
Babel's JavaScript lexer, the same one Babel uses to extract messages from
JavaScript sources; this module only adds the grammar on top of the tokens.

Anything that is not literal syntax (identifiers, calls, operators,
interpolating template strings) raises LiteralSyntaxError.

Python 3.13+. Depends on: babel.
"""

from __future__ import annotations

import math
import re

from babel.messages.jslexer import Token, tokenize, unquote_string

from i18nhint.constants import MAX_LITERAL_DEPTH
from i18nhint.diagnostics import LiteralSyntaxError

__all__ = ["evaluate_literal"]

_SKIPPED_TOKENS = frozenset({"linecomment", "multilinecomment"})

# The lexer reports most numbers as 'name' tokens, so numbers are recognized
# by shape whatever the token type.
_NUMBER_RE = re.compile(r"(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\Z")

_CONSTANTS: dict[str, object] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
    "NaN": math.nan,
    "Infinity": math.inf,
}


def evaluate_literal(source: str) -> object:
    """Evaluate one JavaScript literal.

    Args:
        source: Literal text, e.g. ``{l0001: 'Search', 'l0002': "Cancel",}``

    Returns:
        dict, list, str, int, float, bool or None

    Raises:
        LiteralSyntaxError: If source is not exactly one literal

    Example:
        >>> evaluate_literal("{l0001: 'Search', n: [1, -2.5], ok: true}")
        {'l0001': 'Search', 'n': [1, -2.5], 'ok': True}
    """
    parser = _LiteralParser(source)
    value = parser.parse_value(0)
    parser.expect_end()
    return value


class _LiteralParser:
    """Recursive-descent parser over Babel jslexer tokens."""

    __slots__ = ("_pos", "_tokens")

    def __init__(self, source: str) -> None:
        self._tokens: list[Token] = [
            token
            for token in tokenize(source, jsx=False, dotted=True, template_string=True)
            if token.type not in _SKIPPED_TOKENS
        ]
        self._pos = 0

    def _next(self) -> Token:
        if self._pos >= len(self._tokens):
            msg = "Unexpected end of literal"
            raise LiteralSyntaxError(msg)
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    @staticmethod
    def _is_operator(token: Token, value: str) -> bool:
        return token.type == "operator" and token.value == value

    def expect_end(self) -> None:
        """Raise unless every token has been consumed.

        A single trailing semicolon is tolerated.
        """
        if self._pos < len(self._tokens) and self._is_operator(self._tokens[self._pos], ";"):
            self._pos += 1
        if self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            msg = f"Unexpected {token.value!r} after literal"
            raise LiteralSyntaxError(msg, lineno=token.lineno)

    def parse_value(self, depth: int) -> object:
        """Parse the literal starting at the current token."""
        if depth > MAX_LITERAL_DEPTH:
            msg = f"Literal nesting exceeds {MAX_LITERAL_DEPTH} levels"
            raise LiteralSyntaxError(msg)
        token = self._next()
        match token.type:
            case "operator" if token.value == "{":
                return self._parse_object(depth + 1)
            case "operator" if token.value == "[":
                return self._parse_array(depth + 1)
            case "operator" if token.value in ("-", "+"):
                number = self._parse_number(self._next())
                return -number if token.value == "-" else number
            case "string":
                return self._unquote(token)
            case "template_string":
                if "${" in token.value:
                    msg = "Template string with substitutions is not a literal"
                    raise LiteralSyntaxError(msg, lineno=token.lineno)
                return self._unquote(token)
            case "name" | "number":
                if token.value in _CONSTANTS:
                    return _CONSTANTS[token.value]
                if _NUMBER_RE.match(token.value):
                    return self._parse_number(token)
        msg = f"Not a literal: {token.value!r}"
        raise LiteralSyntaxError(msg, lineno=token.lineno)

    def _parse_object(self, depth: int) -> dict[str, object]:
        result: dict[str, object] = {}
        while True:
            token = self._next()
            if self._is_operator(token, "}"):
                return result
            key = self._parse_key(token)
            colon = self._next()
            if not self._is_operator(colon, ":"):
                msg = f"Expected ':' after key {key!r}, got {colon.value!r}"
                raise LiteralSyntaxError(msg, lineno=colon.lineno)
            result[key] = self.parse_value(depth)
            token = self._next()
            if self._is_operator(token, "}"):
                return result
            if not self._is_operator(token, ","):
                msg = f"Expected ',' or '}}' in object, got {token.value!r}"
                raise LiteralSyntaxError(msg, lineno=token.lineno)

    def _parse_array(self, depth: int) -> list[object]:
        result: list[object] = []
        while True:
            if self._pos < len(self._tokens) and self._is_operator(self._tokens[self._pos], "]"):
                self._pos += 1
                return result
            result.append(self.parse_value(depth))
            token = self._next()
            if self._is_operator(token, "]"):
                return result
            if not self._is_operator(token, ","):
                msg = f"Expected ',' or ']' in array, got {token.value!r}"
                raise LiteralSyntaxError(msg, lineno=token.lineno)

    def _parse_key(self, token: Token) -> str:
        match token.type:
            case "string":
                return self._unquote(token)
            case "name" | "number" if "." not in token.value or _NUMBER_RE.match(token.value):
                return token.value
        msg = f"Invalid object key: {token.value!r}"
        raise LiteralSyntaxError(msg, lineno=token.lineno)

    @staticmethod
    def _parse_number(token: Token) -> int | float:
        value = token.value
        if token.type not in ("name", "number") or not _NUMBER_RE.match(value):
            msg = f"Expected a number, got {value!r}"
            raise LiteralSyntaxError(msg, lineno=token.lineno)
        if value[:2] in ("0x", "0X"):
            return int(value, 16)
        if any(marker in value for marker in ".eE"):
            return float(value)
        return int(value)

    @staticmethod
    def _unquote(token: Token) -> str:
        try:
            return unquote_string(token.value)
        except (AssertionError, ValueError) as exc:
            msg = f"Malformed string literal: {token.value!r}"
            raise LiteralSyntaxError(msg, lineno=token.lineno) from exc
