"""Line lexer for LitScript.

A LitScript line is tokenized with the standard :mod:`tokenize` module and the
resulting flat token stream is folded into four token shapes: identifiers,
literals, single punctuation characters and delimited groups.
"""

import io
import tokenize
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from litscript.errors import LexError


class Delimiter(Enum):
    PARENTHESIS = "()"
    BRACKET = "[]"
    BRACE = "{}"

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


_OPENERS = {d.open: d for d in Delimiter}
_CLOSERS = {d.close: d for d in Delimiter}


@dataclass(frozen=True)
class Identifier:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Literal:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Punctuation:
    char: str

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class Group:
    tokens: Tuple["Token", ...]
    delimiter: Delimiter = Delimiter.PARENTHESIS

    def __str__(self) -> str:
        inner = " ".join(str(token) for token in self.tokens)
        return f"{self.delimiter.open}{inner}{self.delimiter.close}"


Token = Union[Identifier, Literal, Punctuation, Group]

_SKIPPED = {
    tokenize.NEWLINE,
    tokenize.NL,
    tokenize.ENDMARKER,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.COMMENT,
}


def strip_comment(line: str) -> str:
    """Cut ``line`` at the first ``#``."""
    return line.split("#", 1)[0]


def _raw_tokens(line: str) -> List[tokenize.TokenInfo]:
    readline = io.StringIO(line).readline
    try:
        return [
            tok
            for tok in tokenize.generate_tokens(readline)
            if tok.type not in _SKIPPED
        ]
    except (tokenize.TokenError, SyntaxError) as exc:
        raise LexError(f"Unable to tokenize line: {exc}") from exc


def _is_integer_text(text: str) -> bool:
    try:
        int(text, 0)
    except ValueError:
        return False
    return True


def tokenize_line(line: str) -> List[Token]:
    """Tokenize one LitScript line (without its comment).

    ``-`` directly followed by an integer literal is folded into a single
    negative literal. Brackets of any kind open a :class:`Group`; unbalanced
    brackets raise :class:`LexError`.
    """
    raw = _raw_tokens(line.strip())

    stack: List[Tuple[Delimiter, List[Token]]] = []
    current: List[Token] = []

    index = 0
    while index < len(raw):
        tok = raw[index]
        index += 1

        if tok.type == tokenize.NAME:
            current.append(Identifier(tok.string))
            continue

        if tok.type in (tokenize.NUMBER, tokenize.STRING):
            current.append(Literal(tok.string))
            continue

        if tok.type == tokenize.ERRORTOKEN:
            if not tok.string.strip():
                continue
            if tok.string[0] in "\"'":
                raise LexError(f"Unterminated string literal: {tok.string}")
            current.extend(Punctuation(ch) for ch in tok.string)
            continue

        if tok.type != tokenize.OP:
            raise LexError(
                f"Unsupported token {tok.string!r} ({tokenize.tok_name[tok.type]})"
            )

        if (
            tok.string == "-"
            and index < len(raw)
            and raw[index].type == tokenize.NUMBER
            and raw[index].start == tok.end
            and _is_integer_text(raw[index].string)
        ):
            current.append(Literal("-" + raw[index].string))
            index += 1
            continue

        for ch in tok.string:
            if ch in _OPENERS:
                stack.append((_OPENERS[ch], current))
                current = []
            elif ch in _CLOSERS:
                if not stack or stack[-1][0] is not _CLOSERS[ch]:
                    raise LexError(f"Unbalanced closing delimiter '{ch}'")
                delimiter, parent = stack.pop()
                parent.append(Group(tuple(current), delimiter))
                current = parent
            else:
                current.append(Punctuation(ch))

    if stack:
        raise LexError(f"Unclosed delimiter '{stack[-1][0].open}'")
    return current
