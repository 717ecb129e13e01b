from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    is_transparent: bool = False

    def as_rgba(self) -> Tuple[int, int, int, int]:
        # Transparency wins over whatever channels are stored.
        if self.is_transparent:
            return (0, 0, 0, 0)
        return (self.r, self.g, self.b, 255)
