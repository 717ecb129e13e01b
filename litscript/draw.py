from dataclasses import dataclass
from typing import Tuple, Union

from litscript.color import Color


@dataclass(frozen=True)
class Pixel:
    x: int
    y: int
    color: Color


@dataclass(frozen=True)
class Rectangle:
    x: int
    y: int
    w: int
    h: int
    color: Color


@dataclass(frozen=True)
class Square:
    x: int
    y: int
    l: int  # noqa: E741
    color: Color


DrawInstruction = Union[Pixel, Rectangle, Square]

INSTRUCTION_RECORD_SIZE = 9


def instruction_kind(instruction: DrawInstruction) -> int:
    if isinstance(instruction, Pixel):
        return 1
    if isinstance(instruction, Rectangle):
        return 2
    if isinstance(instruction, Square):
        return 3
    raise AssertionError("Unknown draw instruction")


def instruction_bounds(instruction: DrawInstruction) -> Tuple[int, int, int, int]:
    """Return ``(x, y, w, h)`` covered by ``instruction``."""
    if isinstance(instruction, Pixel):
        return (instruction.x, instruction.y, 1, 1)
    if isinstance(instruction, Rectangle):
        return (instruction.x, instruction.y, instruction.w, instruction.h)
    if isinstance(instruction, Square):
        return (instruction.x, instruction.y, instruction.l, instruction.l)
    raise AssertionError("Unknown draw instruction")


def as_int_set(instruction: DrawInstruction) -> Tuple[int, ...]:
    """Flatten an instruction to ``(kind, x, y, w, h, r, g, b, a)``."""
    x, y, w, h = instruction_bounds(instruction)
    return (instruction_kind(instruction), x, y, w, h, *instruction.color.as_rgba())
