"""Public Python API for LitScript.

The package exposes the compile/load workflow: LitScript source is compiled
into bytecode with :func:`compile_source`, and a compiled stream is turned into
a renderer-ready :class:`Game` with :func:`load_game`.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from litscript.bytecode import decode_object, encode_object
from litscript.color import Color
from litscript.compiler import LitsCompiler, Opcode, VariableTable, compile_source
from litscript.errors import (
    CompileError,
    DecodeError,
    EncodingError,
    LitError,
    LitSyntaxError,
    SemanticError,
)
from litscript.game import Game, game_to_dict, load_game
from litscript.material import ImageMaterial
from litscript.renderer import SoftwareRenderer
from litscript.resolver import resolve_dependencies
from litscript.resources import ResourceDictionary, ResourceKind
from litscript.script import Evaluator, GameData, ParserState, load_game_data

try:
    __version__: str = version("litscript")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.2.0"


def about(*, print_output: bool = True) -> str:
    """Return and optionally print the engine format contract.

    Args:
        print_output: Whether to print the returned summary.

    Returns:
        Human-readable summary string.

    Example:
        >>> from litscript import about
        >>> "Opcodes" in about(print_output=False)
        True
    """
    text = (
        f"LitScript {__version__}\n"
        "Byte order: big-endian for opcodes, ids and literal payloads.\n"
        "Opcodes: 16-bit words; 0 terminates evaluation.\n"
        "Literal tags: 1 u8, 2 i16, 3 i32, 4 string, 5 tuple, 6 variable invocation.\n"
        "Variables: ids start at 1 and are never reused within a compilation.\n"
        "Resources: dependencies receive ids before their dependents; a resource "
        "unused for a full frame generation is evicted."
    )
    if print_output:
        print(text)
    return text


__all__ = [
    "__version__",
    "about",
    "Color",
    "CompileError",
    "DecodeError",
    "EncodingError",
    "Evaluator",
    "Game",
    "GameData",
    "ImageMaterial",
    "LitError",
    "LitSyntaxError",
    "LitsCompiler",
    "Opcode",
    "ParserState",
    "ResourceDictionary",
    "ResourceKind",
    "SemanticError",
    "SoftwareRenderer",
    "VariableTable",
    "compile_source",
    "decode_object",
    "encode_object",
    "game_to_dict",
    "load_game",
    "load_game_data",
    "resolve_dependencies",
]
