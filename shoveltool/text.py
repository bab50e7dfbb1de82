"""Small tokenizers for HTML and JavaScript, used when minifying web assets."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class HtmlTokenType(enum.IntEnum):
    """Kinds of atomic HTML token. There is no nesting at this level."""

    COMMENT = 1  # Plain comments only.
    PI = 2  # Other "<!" constructions.
    TEXT = 3  # Plain text, trimmed. May contain escapes.
    SINGLETON = 4  # Explicit singleton tag, eg "<br/>". Named void elements are not special.
    OPEN = 5
    CLOSE = 6


@dataclass(frozen=True)
class HtmlToken:
    """One HTML token.

    (text) is the token's full text; (name) and (attr) are set for tags only.
    (length) is how much input was consumed, trailing whitespace included.
    """

    type: HtmlTokenType
    text: str
    length: int
    name: str = ""
    attr: str = ""


def _is_space(ch: str) -> bool:
    return ord(ch) <= 0x20


def _skip_space(src: str, pos: int) -> int:
    while pos < len(src) and _is_space(src[pos]):
        pos += 1
    return pos


def lineno(src: str) -> int:
    """One-based line number at the end of (src)."""
    return src.count("\n") + 1


def next_html_token(src: str) -> HtmlToken | None:
    """Read the next HTML token from the start of (src).

    Leading and trailing whitespace is consumed quietly. Returns None at the
    end of input, which includes input that is all whitespace.
    Raises ValueError for malformed markup.
    """
    end = len(src)
    pos = _skip_space(src, 0)
    if pos >= end:
        return None
    start = pos

    if src[pos] != "<":
        stop = src.find("<", pos)
        if stop < 0:
            stop = end
        text = src[start:stop].rstrip("".join(chr(c) for c in range(0x21)))
        return HtmlToken(HtmlTokenType.TEXT, text, stop)

    if pos < end - 4 and src.startswith("<!--", pos):
        close = src.find("-->", pos + 4)
        if close < 0:
            raise ValueError("Unclosed HTML comment.")
        stop = close + 3
        return HtmlToken(HtmlTokenType.COMMENT, src[start:stop], _skip_space(src, stop))

    if pos < end - 2 and src.startswith("<!", pos):
        close = src.find(">", pos + 2)
        if close < 0:
            raise ValueError("Unclosed HTML declaration.")
        stop = close + 1
        return HtmlToken(HtmlTokenType.PI, src[start:stop], _skip_space(src, stop))

    kind = HtmlTokenType.OPEN
    pos = _skip_space(src, pos + 1)
    if pos >= end:
        raise ValueError("Unexpected end of input in HTML tag.")
    if src[pos] == "/":
        kind = HtmlTokenType.CLOSE
        pos = _skip_space(src, pos + 1)

    name_start = pos
    while pos < end and not _is_space(src[pos]) and src[pos] not in ">/":
        pos += 1
    name = src[name_start:pos]
    pos = _skip_space(src, pos)

    attr_start = pos
    while pos < end and src[pos] not in ">/":
        pos += 1
    attr = src[attr_start:pos]
    while attr and _is_space(attr[-1]):
        attr = attr[:-1]
    if pos >= end:
        raise ValueError("Unexpected end of input in HTML tag.")

    if src[pos] == "/" and kind == HtmlTokenType.OPEN:
        kind = HtmlTokenType.SINGLETON
        pos = _skip_space(src, pos + 1)
        if pos >= end:
            raise ValueError("Unexpected end of input in HTML tag.")
    if src[pos] != ">":
        raise ValueError(f"Malformed HTML tag at line {lineno(src[:pos])}.")
    pos += 1
    return HtmlToken(kind, src[start:pos], _skip_space(src, pos), name, attr)


def _is_ident(ch: str) -> bool:
    # Identifiers are kept to ASCII letters, digits and underscore.
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9")


def js_token_measure(src: str) -> int:
    """Length of the JavaScript token or whitespace run at the start of (src).

    Returns 0 for empty input. Raises ValueError for unclosed block comments
    and strings, and for strings containing a newline. Inline regular
    expressions are not recognised, and multi-character operators come out
    one character at a time.
    """
    end = len(src)
    if end < 1:
        return 0
    first = src[0]

    if _is_space(first):
        return _skip_space(src, 1)

    if first == "/" and end >= 2:
        if src[1] == "/":
            newline = src.find("\n", 2)
            return end if newline < 0 else newline + 1
        if src[1] == "*":
            close = src.find("*/", 2)
            if close < 0:
                raise ValueError("Unclosed block comment.")
            return close + 2

    if first in "\"'`":
        pos = 1
        while True:
            if pos >= end:
                raise ValueError("Unclosed string.")
            ch = src[pos]
            if ch == "\n":
                raise ValueError("Newline in string.")
            if ch == "\\":
                pos += 2
            elif ch == first:
                return pos + 1
            else:
                pos += 1

    if _is_ident(first):
        pos = 1
        while pos < end and _is_ident(src[pos]):
            pos += 1
        return pos

    return 1


def js_space_required(a: str, b: str) -> bool:
    """Whether tokens (a) and (b) need a space between them to stay distinct."""
    if not a or not b:
        return False
    return _is_ident(a[-1]) and _is_ident(b[0])