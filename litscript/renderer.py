"""Renderer collaborators.

A renderer turns a prepared :class:`~litscript.material.ImageMaterial` into a
resource and releases it again on eviction. :class:`SoftwareRenderer` does this
on the CPU and produces RGBA pixel buffers.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, Tuple

from litscript.draw import INSTRUCTION_RECORD_SIZE
from litscript.material import ImageMaterial


class Renderer(Protocol):
    def build_resource(self, material: ImageMaterial) -> Any:
        ...

    def release_resource(self, resource: Any) -> None:
        ...


@dataclass(eq=False)
class ImageTexture:
    width: int
    height: int
    pixels: bytes
    released: bool = field(default=False)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} texture")
        offset = (y * self.width + x) * 4
        r, g, b, a = self.pixels[offset : offset + 4]
        return (r, g, b, a)


class SoftwareRenderer:
    def __init__(self):
        self.built = 0
        self.released = 0

    def build_resource(self, material: ImageMaterial) -> ImageTexture:
        width, height = material.width, material.height
        pixels = bytearray(bytes(material.background_color.as_rgba()) * (width * height))

        # The prepared buffer lists the most recent instruction first; paint
        # oldest first so later instructions cover earlier ones.
        buffer = material.buffer
        records = [
            buffer[i : i + INSTRUCTION_RECORD_SIZE]
            for i in range(0, len(buffer), INSTRUCTION_RECORD_SIZE)
        ]
        for _kind, x, y, w, h, r, g, b, a in reversed(records):
            color = bytes((r, g, b, a))
            x0, x1 = max(x, 0), min(x + w, width)
            y0, y1 = max(y, 0), min(y + h, height)
            if x0 >= x1:
                continue
            for row in range(y0, y1):
                start = (row * width + x0) * 4
                pixels[start : (row * width + x1) * 4] = color * (x1 - x0)

        self.built += 1
        return ImageTexture(width, height, bytes(pixels))

    def release_resource(self, resource: ImageTexture) -> None:
        resource.released = True
        self.released += 1
