import io
import logging
from typing import BinaryIO, Iterable, Optional

from litscript.compiler.command import process_command
from litscript.compiler.state import VariableTable
from litscript.errors import CompileError, LitError, UnexpectedToken, line_context
from litscript.lexer import Identifier, strip_comment, tokenize_line

logger = logging.getLogger(__name__)


def compile_line(line: str, stream: BinaryIO, table: VariableTable) -> int:
    """Compile one LitScript line into ``stream``.

    The line is encoded into a scratch buffer first, so a failing line writes
    nothing. Returns the number of bytes written.
    """
    code = strip_comment(line)
    with line_context(code):
        tokens = iter(tokenize_line(code))
        head = next(tokens, None)
        if head is None:
            return 0
        if not isinstance(head, Identifier):
            raise UnexpectedToken(head, "Expected a command name")

        buffer = io.BytesIO()
        process_command(head, tokens, buffer, table)

    data = buffer.getvalue()
    stream.write(data)
    return len(data)


class LitsCompiler:
    def __init__(self, table: Optional[VariableTable] = None):
        """Create a compiler; all lines share one variable table."""
        self.table = table if table is not None else VariableTable()

    def compile_lines(self, lines: Iterable[str], stream: BinaryIO) -> int:
        """Compile ``lines`` into ``stream`` in order.

        Raises:
            CompileError: Wrapping the first failure with its 0-based line number.
        """
        written = 0
        for index, line in enumerate(lines):
            try:
                written += compile_line(line.rstrip("\r\n"), stream, self.table)
            except LitError as exc:
                raise CompileError(index, exc) from exc
        logger.debug("Compiled %d bytes, %d variables", written, len(self.table))
        return written

    def compile(self, source: str) -> bytes:
        """Compile a whole LitScript source into bytecode."""
        stream = io.BytesIO()
        self.compile_lines(source.splitlines(), stream)
        return stream.getvalue()


def compile_source(source: str) -> bytes:
    """Compile ``source`` with a fresh variable table."""
    return LitsCompiler().compile(source)
