"""Formula tokenizer with balanced-parenthesis scanning for call fragments."""

from __future__ import annotations

import logging
import re

from .errors import ParseError
from .registry import function_names
from .tokens import AlphaRef, Call, LParen, Number, Operator, RParen, Token, Variable, format_tokens

LOGGER = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"[A-Za-z_]\w*", re.ASCII)
_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?")
_OPERATORS = frozenset("+-*/")

ALPHA_SYMBOL = "alpha"
VARIABLE_SYMBOL = "x"


def find_matching_paren(text: str, open_pos: int) -> int:
    """Return the index of the ``)`` closing the ``(`` at ``open_pos``, or -1."""
    depth = 0
    for idx in range(open_pos, len(text)):
        char = text[idx]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return idx
    return -1


def split_arguments(text: str) -> list[str]:
    """Split an argument list on commas that are not nested inside parentheses.

    >>> split_arguments("max(x, -1), 1")
    ['max(x, -1)', '1']
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for idx, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ParseError(f"Unmatched ')' in argument list: {text!r}")
        elif char == "," and depth == 0:
            parts.append(text[start:idx].strip())
            start = idx + 1
    if depth != 0:
        raise ParseError(f"Unmatched '(' in argument list: {text!r}")
    parts.append(text[start:].strip())
    return parts


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _scan_identifier(text: str, pos: int, match: re.Match[str]) -> tuple[Token, int]:
    name = match.group(0)
    after = _skip_whitespace(text, match.end())
    if after < len(text) and text[after] == "(":
        close = find_matching_paren(text, after)
        if close < 0:
            raise ParseError(f"Unmatched '(' in call to {name!r} at position {after}: {text!r}")
        if name not in function_names():
            LOGGER.warning("Formula references unregistered function %r: %s", name, text)
        return Call(name=name, argument_text=text[after + 1 : close].strip()), close + 1
    if name == ALPHA_SYMBOL:
        return AlphaRef(), match.end()
    if name == VARIABLE_SYMBOL:
        return Variable(), match.end()
    raise ParseError(f"Unsupported formula symbol {name!r} at position {pos}: {text!r}")


def tokenize(source: str) -> tuple[Token, ...]:
    """Scan ``source`` left to right into an immutable token sequence."""
    text = str(source)
    tokens: list[Token] = []
    pos = _skip_whitespace(text, 0)
    while pos < len(text):
        char = text[pos]
        ident = _IDENT_RE.match(text, pos)
        if ident is not None:
            token, pos = _scan_identifier(text, pos, ident)
            tokens.append(token)
        elif char in _OPERATORS:
            tokens.append(Operator(char))
            pos += 1
        elif char == "(":
            tokens.append(LParen())
            pos += 1
        elif char == ")":
            tokens.append(RParen())
            pos += 1
        else:
            number = _NUMBER_RE.match(text, pos)
            if number is None:
                raise ParseError(f"Unexpected character {char!r} at position {pos}: {text!r}")
            tokens.append(Number(float(number.group(0))))
            pos = number.end()
        pos = _skip_whitespace(text, pos)

    if not tokens:
        raise ParseError(f"Formula produced no tokens: {text!r}")
    LOGGER.debug("Parsed tokens for %r: %s", text, format_tokens(tokens))
    return tuple(tokens)


__all__ = ["ALPHA_SYMBOL", "VARIABLE_SYMBOL", "find_matching_paren", "split_arguments", "tokenize"]
