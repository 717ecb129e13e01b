import ast
import io
from typing import BinaryIO, Iterator

from litscript.bytecode import (
    encode_object,
    encode_str,
    encode_tuple_payload,
    encode_var_invocation,
    numeric,
)
from litscript.compiler.state import VariableTable
from litscript.errors import ExpectedIdentifier, UnexpectedToken
from litscript.lexer import Delimiter, Group, Identifier, Literal, Punctuation, Token


def _parse_string_literal(token: Literal) -> str:
    try:
        value = ast.literal_eval(token.text)
    except (ValueError, SyntaxError) as exc:
        raise UnexpectedToken(token, "Unexpected literal") from exc
    if not isinstance(value, str):
        raise UnexpectedToken(token, "Unexpected literal")
    return value


def _parse_int_literal(token: Literal) -> int:
    try:
        return int(token.text, 0)
    except ValueError as exc:
        raise UnexpectedToken(token, "Unexpected literal") from exc


def encode_literal(token: Literal) -> bytes:
    if token.text[:1] in ("'", '"'):
        return encode_str(_parse_string_literal(token))
    return encode_object(numeric(_parse_int_literal(token)))


def process_literals(
    tokens: Iterator[Token],
    stream: BinaryIO,
    table: VariableTable,
) -> int:
    """Encode every remaining token of ``tokens`` into ``stream``.

    Commas are accepted as optional element separators and are not encoded.

    Returns:
        Number of encoded elements.
    """
    processed = 0

    for token in tokens:
        if isinstance(token, Literal):
            stream.write(encode_literal(token))
        elif isinstance(token, Punctuation):
            if token.char == ",":
                continue
            if token.char != "@":
                raise UnexpectedToken(token, "Unexpected punctuation")
            name = next(tokens, None)
            if not isinstance(name, Identifier):
                raise ExpectedIdentifier(name)
            stream.write(encode_var_invocation(table.get_variable_id(name.name)))
        elif isinstance(token, Group):
            if token.delimiter is not Delimiter.PARENTHESIS:
                raise UnexpectedToken(
                    token, "Only parenthesized groups are supported"
                )
            buffer = io.BytesIO()
            count = process_literals(iter(token.tokens), buffer, table)
            stream.write(encode_tuple_payload(count, buffer.getvalue()))
        else:
            raise UnexpectedToken(token)

        processed += 1

    return processed
