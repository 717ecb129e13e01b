import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence


_CURRENT_SOURCE_LINE: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "litscript_current_source_line", default=None
)


def _format_with_context(message: str, *, line: Optional[str] = None) -> str:
    line = line if line is not None else _CURRENT_SOURCE_LINE.get()
    if not line or not line.strip():
        return message
    return f"{message}\nCode: {line.strip()}"


@contextmanager
def line_context(line: str) -> Iterator[None]:
    """Attach ``line`` to syntax and encoding errors raised inside the block."""
    token = _CURRENT_SOURCE_LINE.set(line)
    try:
        yield
    finally:
        _CURRENT_SOURCE_LINE.reset(token)


class LitError(Exception):
    """Base error for the LitScript toolchain and runtime."""


# Syntax


class LitSyntaxError(LitError):
    """Raised when a source line cannot be turned into bytecode."""

    def __init__(self, message: str):
        super().__init__(_format_with_context(message))


class LexError(LitSyntaxError):
    pass


class UnexpectedToken(LitSyntaxError):
    def __init__(self, token: object, detail: str = "Unexpected token"):
        self.token = token
        super().__init__(f"{detail}: {token}")


class ExpectedIdentifier(LitSyntaxError):
    def __init__(self, found: object = None):
        self.found = found
        if found is None:
            super().__init__("Expected an identifier, found end of line")
        else:
            super().__init__(f"Expected an identifier, found {found}")


class UnknownCommand(LitSyntaxError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name}")


# Encoding


class EncodingError(LitError):
    def __init__(self, message: str):
        super().__init__(_format_with_context(message))


class ValueTooLongToEncode(EncodingError):
    def __init__(self, what: str, length: int, limit: int = 255):
        self.length = length
        self.limit = limit
        super().__init__(f"{what} of length {length} exceeds the limit of {limit}")


class ValueOutOfRange(EncodingError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Integer value {value} does not fit in 32 bits")


# Decoding


class DecodeError(LitError):
    pass


class UnrecognizedTag(DecodeError):
    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Unexpected byte while reading bytecode: {tag:#04X}")


class UnrecognizedOpcode(DecodeError):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unexpected word while reading bytecode: {opcode:#06X}")


class TruncatedStream(DecodeError):
    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Unexpected end of bytecode: expected {expected} byte(s), found {found}"
        )


class InvalidStringData(DecodeError):
    pass


# Semantics


class SemanticError(LitError):
    pass


class VariableNotFound(SemanticError):
    def __init__(self, key: object):
        self.key = key
        if isinstance(key, int):
            super().__init__(f"Unable to find variable with reference {key:#X}")
        else:
            super().__init__(f"Unable to find variable named '{key}'")


class ColorIndexNotFound(SemanticError):
    def __init__(self, object_id: int, index: int):
        self.object_id = object_id
        self.index = index
        super().__init__(f"Color map at {object_id} does not contain color {index}")


class MissingMaterial(SemanticError):
    def __init__(self, material_id: int):
        self.material_id = material_id
        super().__init__(f"No material with the ID {material_id} was found")


class MissingResource(SemanticError):
    def __init__(self, resource_id: int):
        self.resource_id = resource_id
        super().__init__(f"No resource with the ID {resource_id} is loaded")


class ImproperDimensions(SemanticError):
    def __init__(self, expected: str, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} dimensions, found {found}")


class IncorrectDataType(SemanticError):
    def __init__(self, found: object, expected: object):
        self.found = found
        self.expected = expected
        super().__init__(f"Expected data type {expected}, found {found}")


class ValueConversionError(SemanticError):
    pass


class FormatArgumentMismatch(SemanticError):
    def __init__(self, placeholders: int, arguments: int):
        self.placeholders = placeholders
        self.arguments = arguments
        super().__init__(
            f"Format string has {placeholders} placeholder(s) but only "
            f"{arguments} argument(s) were given"
        )


class DependencyCycle(SemanticError):
    def __init__(self, ids: Sequence[int]):
        self.ids = tuple(ids)
        chain = " -> ".join(str(i) for i in self.ids)
        super().__init__(f"Dependency cycle between variables: {chain}")


# I/O


class LitIOError(LitError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"An IO error occurred: {cause}")


class CompileError(LitError):
    """A compile failure bound to the 0-based source line that caused it."""

    def __init__(self, line: int, cause: LitError):
        self.line = line
        self.cause = cause
        super().__init__(f"Error occurred on line {line}: {cause}")
