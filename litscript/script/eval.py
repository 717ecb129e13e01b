import logging
import warnings
from enum import Enum
from typing import BinaryIO, Callable, Optional, Sequence, Tuple

from litscript.bytecode import (
    I16_MAX,
    I16_MIN,
    U8_MAX,
    BytecodeObject,
    DataType,
    MaterialValue,
    VarInvocation,
    decode_object,
    direct_data_type,
    read_u32,
)
from litscript.color import Color
from litscript.compiler.constants import Opcode
from litscript.errors import (
    FormatArgumentMismatch,
    ImproperDimensions,
    IncorrectDataType,
    LitError,
    TruncatedStream,
    UnrecognizedOpcode,
    ValueConversionError,
)
from litscript.material import DIMENSION_MAX, ImageMaterial
from litscript.resources import DependencyDescriptor, ResourceKind
from litscript.script.state import GameData, ParserState

logger = logging.getLogger(__name__)


class EvalStatus(Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    ERRORED = "errored"


def format_log_line(fmt: str, arguments: Sequence[str]) -> str:
    """Replace each ``{}`` in ``fmt`` with the next argument, in order."""
    parts = fmt.split("{}")
    placeholders = len(parts) - 1
    if len(arguments) < placeholders:
        raise FormatArgumentMismatch(placeholders, len(arguments))
    if len(arguments) > placeholders:
        warnings.warn(
            f"Log format {fmt!r} ignores {len(arguments) - placeholders} surplus argument(s).",
            stacklevel=2,
        )
    out = [parts[0]]
    for argument, part in zip(arguments, parts[1:]):
        out.append(argument)
        out.append(part)
    return "".join(out)


class Evaluator:
    """Decode and apply bytecode instructions until the stream ends.

    Args:
        state: Parser state receiving variables, colors and dependencies.
        data: Game data receiving the game's display name.
        log_sink: Called with each line produced by a ``log`` instruction.
    """

    def __init__(
        self,
        state: Optional[ParserState] = None,
        data: Optional[GameData] = None,
        log_sink: Callable[[str], None] = print,
    ):
        self.state = state if state is not None else ParserState()
        self.data = data if data is not None else GameData()
        self.log_sink = log_sink
        self.status = EvalStatus.RUNNING
        self.instructions = 0

    def run(self, stream: BinaryIO) -> EvalStatus:
        try:
            while self.status is EvalStatus.RUNNING:
                self.step(stream)
        except LitError:
            self.status = EvalStatus.ERRORED
            raise
        logger.debug("Evaluated %d instruction(s)", self.instructions)
        return self.status

    def step(self, stream: BinaryIO) -> None:
        head = stream.read(2)
        if not head:
            self.status = EvalStatus.STOPPED
            return
        if len(head) != 2:
            raise TruncatedStream(2, len(head))

        word = int.from_bytes(head, "big")
        try:
            opcode = Opcode(word)
        except ValueError as exc:
            raise UnrecognizedOpcode(word) from exc

        logger.debug("Opcode %s", opcode.name)
        if opcode is Opcode.END:
            self.status = EvalStatus.STOPPED
            return

        handler = getattr(self, f"_op_{opcode.name.lower()}")
        handler(stream)
        self.instructions += 1

    # Operand helpers

    def _narrow(self, obj: BytecodeObject, low: int, high: int, what: str) -> int:
        value = self.state.as_number(obj)
        if not low <= value <= high:
            raise ValueConversionError(
                f"{what} {value} does not fit in the range {low}..{high}"
            )
        return value

    def _read_number(self, stream: BinaryIO, low: int, high: int, what: str) -> int:
        return self._narrow(decode_object(stream), low, high, what)

    def _to_color(self, obj: BytecodeObject) -> Color:
        channels = self.state.as_tuple(obj)
        if len(channels) not in (3, 4):
            raise ImproperDimensions("3 or 4", len(channels))
        r, g, b = (self._narrow(c, 0, U8_MAX, "Color channel") for c in channels[:3])
        # Any non-zero fourth channel is opaque.
        if len(channels) == 4 and self.state.as_number(channels[3]) == 0:
            return Color(r, g, b, True)
        return Color(r, g, b)

    def _read_target(self, stream: BinaryIO) -> Tuple[int, ImageMaterial]:
        obj = decode_object(stream)
        if not isinstance(obj, VarInvocation):
            raise IncorrectDataType(direct_data_type(obj), "VarInvocation")
        target_id = self.state.resolve_id(obj.var_id)
        return target_id, self.state.as_material(self.state.get_variable(target_id))

    def _read_draw_color(self, stream: BinaryIO, target_id: int) -> Color:
        # One operand sits at the color position: either an override index
        # registered with color_id, or a literal color tuple.
        obj = decode_object(stream)
        if self.state.is_numeric(obj):
            index = self._narrow(obj, 0, U8_MAX, "Color index")
            return self.state.get_color(target_id, index)
        if self.state.data_type(obj) is DataType.TUPLE:
            return self._to_color(obj)
        raise IncorrectDataType(self.state.data_type(obj), "Numeric or Tuple")

    # Instructions

    def _op_gamedef(self, stream: BinaryIO) -> None:
        self.data.name = self.state.as_string(decode_object(stream))

    def _op_def(self, stream: BinaryIO) -> None:
        var_id = read_u32(stream)
        self.state.register_variable(var_id, decode_object(stream))

    def _op_log(self, stream: BinaryIO) -> None:
        fmt = self.state.as_string(decode_object(stream))
        items = self.state.as_tuple(decode_object(stream))
        line = format_log_line(fmt, [self.state.stringify(item) for item in items])
        self.log_sink(line)

    def _op_create_tex(self, stream: BinaryIO) -> None:
        var_id = read_u32(stream)
        width = self._read_number(stream, 0, DIMENSION_MAX, "Width")
        height = self._read_number(stream, 0, DIMENSION_MAX, "Height")
        background = self._to_color(decode_object(stream))

        material = ImageMaterial(width, height, background)
        self.state.register_variable(var_id, MaterialValue(material))
        self.state.add_pending_material(var_id)

    def _op_color_id(self, stream: BinaryIO) -> None:
        target_id, _material = self._read_target(stream)
        index = self._read_number(stream, 0, U8_MAX, "Color index")
        color = self._to_color(decode_object(stream))
        self.state.register_color(target_id, index, color)

    def _op_draw_pixel(self, stream: BinaryIO) -> None:
        target_id, material = self._read_target(stream)
        x = self._read_number(stream, I16_MIN, I16_MAX, "X coordinate")
        y = self._read_number(stream, I16_MIN, I16_MAX, "Y coordinate")
        material.draw_pixel(x, y, self._read_draw_color(stream, target_id))

    def _op_draw_rectangle(self, stream: BinaryIO) -> None:
        target_id, material = self._read_target(stream)
        x = self._read_number(stream, I16_MIN, I16_MAX, "X coordinate")
        y = self._read_number(stream, I16_MIN, I16_MAX, "Y coordinate")
        w = self._read_number(stream, I16_MIN, I16_MAX, "Width")
        h = self._read_number(stream, I16_MIN, I16_MAX, "Height")
        material.draw_rectangle(x, y, w, h, self._read_draw_color(stream, target_id))

    def _op_depend(self, stream: BinaryIO) -> None:
        dependent_id, _material = self._read_target(stream)
        dependency_id, _dependency = self._read_target(stream)
        self.state.add_dependency(
            dependent_id, DependencyDescriptor(ResourceKind.IMAGE, dependency_id)
        )


def load_game_data(
    stream: BinaryIO,
    log_sink: Callable[[str], None] = print,
) -> Tuple[GameData, ParserState]:
    """Evaluate a compiled stream into fresh game data and parser state."""
    evaluator = Evaluator(log_sink=log_sink)
    evaluator.run(stream)
    return evaluator.data, evaluator.state
