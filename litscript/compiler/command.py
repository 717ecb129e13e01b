import struct
from typing import BinaryIO, Iterator

from litscript.compiler.constants import COMMAND_OPCODES, DEFINING_COMMANDS
from litscript.compiler.literals import process_literals
from litscript.compiler.state import VariableTable
from litscript.errors import ExpectedIdentifier, UnknownCommand
from litscript.lexer import Identifier, Token


def write_word(stream: BinaryIO, word: int) -> None:
    stream.write(struct.pack(">H", word))


def process_command(
    ident: Identifier,
    tokens: Iterator[Token],
    stream: BinaryIO,
    table: VariableTable,
) -> None:
    """Write the instruction named by ``ident`` followed by its operands."""
    name = ident.name
    opcode = COMMAND_OPCODES.get(name)
    if opcode is None:
        raise UnknownCommand(name)

    write_word(stream, opcode)

    if name in DEFINING_COMMANDS:
        target = next(tokens, None)
        if not isinstance(target, Identifier):
            raise ExpectedIdentifier(target)
        var_id = table.register_variable(target.name)
        stream.write(struct.pack(">I", var_id))

    process_literals(tokens, stream, table)
