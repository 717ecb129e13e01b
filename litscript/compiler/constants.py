from enum import IntEnum


class Opcode(IntEnum):
    END = 0
    GAMEDEF = 1
    DEF = 2
    LOG = 3
    CREATE_TEX = 4
    COLOR_ID = 5
    DRAW_PIXEL = 6
    DRAW_RECTANGLE = 7
    DEPEND = 8


COMMAND_OPCODES = {
    "gamedef": Opcode.GAMEDEF,
    "def": Opcode.DEF,
    "log": Opcode.LOG,
    "create_tex": Opcode.CREATE_TEX,
    "color_id": Opcode.COLOR_ID,
    "draw_pixel": Opcode.DRAW_PIXEL,
    "draw_rectangle": Opcode.DRAW_RECTANGLE,
    "depend": Opcode.DEPEND,
}

# Commands that bind the identifier following them to a fresh variable id.
DEFINING_COMMANDS = frozenset({"def", "create_tex"})

__all__ = [
    "Opcode",
    "COMMAND_OPCODES",
    "DEFINING_COMMANDS",
]
