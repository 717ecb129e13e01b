"""Image materials: resource descriptions prior to renderer residency."""

from dataclasses import dataclass
from typing import List, Tuple, Union

from litscript.color import Color
from litscript.draw import DrawInstruction, Pixel, Rectangle, Square, as_int_set
from litscript.errors import ImproperDimensions

DIMENSION_MAX = 32767


@dataclass(frozen=True)
class Unprepared:
    pass


@dataclass(frozen=True)
class Prepared:
    buffer: Tuple[int, ...]


MaterialState = Union[Unprepared, Prepared]


class ImageMaterial:
    """A width x height image built from a background color and draw instructions.

    The derived draw buffer is memoized: :meth:`prepare` builds it once and is a
    no-op while the material stays ``Prepared``. Adding a draw instruction moves
    the material back to ``Unprepared``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background_color: Color,
        draws: List[DrawInstruction] | None = None,
        dependencies: Tuple[int, ...] = (),
    ):
        for value in (width, height):
            if not 0 <= value <= DIMENSION_MAX:
                raise ImproperDimensions(f"0..{DIMENSION_MAX}", value)
        self.width = width
        self.height = height
        self.background_color = background_color
        self.draws: List[DrawInstruction] = list(draws or [])
        self.dependencies = tuple(dependencies)
        self.state: MaterialState = Unprepared()
        self.prepare_count = 0

    def __repr__(self) -> str:
        return (
            f"ImageMaterial({self.width}x{self.height}, draws={len(self.draws)}, "
            f"state={type(self.state).__name__})"
        )

    def __str__(self) -> str:
        return f"{self.width}x{self.height} Image"

    @property
    def is_prepared(self) -> bool:
        return isinstance(self.state, Prepared)

    @property
    def buffer(self) -> Tuple[int, ...]:
        if not isinstance(self.state, Prepared):
            raise RuntimeError(f"{self} has not been prepared.")
        return self.state.buffer

    def _push(self, instruction: DrawInstruction) -> None:
        self.draws.append(instruction)
        self.state = Unprepared()

    def draw_pixel(self, x: int, y: int, color: Color) -> None:
        self._push(Pixel(x, y, color))

    def draw_rectangle(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        self._push(Rectangle(x, y, w, h, color))

    def draw_square(self, x: int, y: int, length: int, color: Color) -> None:
        self._push(Square(x, y, length, color))

    def prepare(self) -> Tuple[int, ...]:
        if isinstance(self.state, Prepared):
            return self.state.buffer

        # Most recent instruction first, so the first hit per pixel wins.
        flat: List[int] = []
        for instruction in reversed(self.draws):
            flat.extend(as_int_set(instruction))
        self.state = Prepared(tuple(flat))
        self.prepare_count += 1
        return self.state.buffer

    def with_dependencies(self, dependencies: Tuple[int, ...]) -> "ImageMaterial":
        """Return a copy bound to resolved dependency resource ids."""
        return ImageMaterial(
            self.width,
            self.height,
            self.background_color,
            self.draws,
            dependencies=dependencies,
        )
