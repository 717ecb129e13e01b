import io

import pytest

from litscript.compiler import VariableTable, process_literals
from litscript.errors import (
    ExpectedIdentifier,
    UnexpectedToken,
    ValueOutOfRange,
    ValueTooLongToEncode,
    VariableNotFound,
)
from litscript.lexer import tokenize_line


def encode(line: str, table: VariableTable | None = None) -> bytes:
    stream = io.BytesIO()
    process_literals(iter(tokenize_line(line)), stream, table or VariableTable())
    return stream.getvalue()


def test_integer_boundaries_pick_smallest_tag():
    assert encode("0") == b"\x01\x00"
    assert encode("255") == b"\x01\xff"
    assert encode("256") == b"\x02\x01\x00"
    assert encode("32767") == b"\x02\x7f\xff"
    assert encode("32768") == b"\x03\x00\x00\x80\x00"


def test_negative_integers_use_signed_tags():
    assert encode("-1") == b"\x02\xff\xff"
    assert encode("-32768") == b"\x02\x80\x00"
    assert encode("-32769") == b"\x03\xff\xff\x7f\xff"


def test_integer_outside_32_bits_is_rejected():
    with pytest.raises(ValueOutOfRange):
        encode("2147483648")


def test_string_literal_is_length_prefixed_utf8():
    assert encode('"hi"') == b"\x04\x02hi"
    assert encode('"é"') == b"\x04\x02\xc3\xa9"
    assert encode("'single'") == b"\x04\x06single"


def test_string_of_255_bytes_encodes_but_256_fails():
    assert len(encode('"' + "a" * 255 + '"')) == 257

    with pytest.raises(ValueTooLongToEncode):
        encode('"' + "a" * 256 + '"')


def test_group_encodes_element_count_and_elements():
    assert encode("(1, 2)") == b"\x05\x02\x01\x01\x01\x02"
    assert encode("(1 2)") == b"\x05\x02\x01\x01\x01\x02"
    assert encode("()") == b"\x05\x00"


def test_nested_group_recurses():
    assert encode('((7) "a")') == b"\x05\x02" + b"\x05\x01\x01\x07" + b"\x04\x01a"


def test_group_with_more_than_255_elements_fails():
    line = "(" + " ".join("1" for _ in range(256)) + ")"
    with pytest.raises(ValueTooLongToEncode):
        encode(line)


def test_variable_invocation_uses_registered_id():
    table = VariableTable()
    table.register_variable("first")
    table.register_variable("second")

    assert encode("@second", table) == b"\x06\x00\x00\x00\x02"


def test_unknown_variable_invocation_fails():
    with pytest.raises(VariableNotFound, match="ghost"):
        encode("@ghost")


@pytest.mark.parametrize("line", ["@", "@ 5"])
def test_at_sign_requires_identifier(line):
    with pytest.raises(ExpectedIdentifier):
        encode(line)


@pytest.mark.parametrize("line", ["1.5", "bare_name", "[1]", "+", "b'raw'"])
def test_other_token_shapes_are_rejected(line):
    with pytest.raises(UnexpectedToken):
        encode(line)


def test_process_literals_returns_element_count():
    stream = io.BytesIO()
    count = process_literals(iter(tokenize_line('1 "a" (2, 3)')), stream, VariableTable())
    assert count == 3
