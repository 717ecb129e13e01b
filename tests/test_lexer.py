import pytest

from litscript.errors import LexError
from litscript.lexer import (
    Delimiter,
    Group,
    Identifier,
    Literal,
    Punctuation,
    strip_comment,
    tokenize_line,
)


def test_tokenize_command_with_identifier_and_number():
    assert tokenize_line("def foo 5") == [
        Identifier("def"),
        Identifier("foo"),
        Literal("5"),
    ]


def test_tokenize_string_and_parenthesized_group():
    tokens = tokenize_line('log "x={} y={}" (1, 2)')

    assert tokens == [
        Identifier("log"),
        Literal('"x={} y={}"'),
        Group((Literal("1"), Punctuation(","), Literal("2")), Delimiter.PARENTHESIS),
    ]


def test_tokenize_nested_groups_keep_their_delimiters():
    tokens = tokenize_line("x ((1) [2])")

    outer = tokens[1]
    assert isinstance(outer, Group)
    assert outer.tokens[0] == Group((Literal("1"),), Delimiter.PARENTHESIS)
    assert outer.tokens[1] == Group((Literal("2"),), Delimiter.BRACKET)


def test_tokenize_variable_invocation_is_punctuation_then_identifier():
    assert tokenize_line("@foo") == [Punctuation("@"), Identifier("foo")]


def test_minus_directly_before_integer_folds_into_negative_literal():
    assert tokenize_line("-5") == [Literal("-5")]
    assert tokenize_line("- 5") == [Punctuation("-"), Literal("5")]


def test_blank_line_has_no_tokens():
    assert tokenize_line("   ") == []


def test_strip_comment_cuts_at_first_hash():
    assert strip_comment('gamedef "Demo" # the name') == 'gamedef "Demo" '
    assert strip_comment("# only a comment") == ""


@pytest.mark.parametrize("line", ["(1, 2", "[1", '"unterminated'])
def test_unbalanced_input_raises_lex_error(line):
    with pytest.raises(LexError):
        tokenize_line(line)


def test_group_str_renders_delimiters():
    group = tokenize_line("(1, 2)")[0]
    assert str(group) == "(1 , 2)"
