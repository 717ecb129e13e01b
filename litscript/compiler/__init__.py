"""Public compiler entry points.

Use :class:`litscript.compiler.core.LitsCompiler` or :func:`compile_source`
as the stable API.
"""

from litscript.compiler.command import process_command
from litscript.compiler.constants import Opcode
from litscript.compiler.core import LitsCompiler, compile_line, compile_source
from litscript.compiler.literals import process_literals
from litscript.compiler.state import VariableTable

__all__ = [
    "LitsCompiler",
    "Opcode",
    "VariableTable",
    "compile_line",
    "compile_source",
    "process_command",
    "process_literals",
]
