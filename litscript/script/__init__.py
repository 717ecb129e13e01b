"""Run-time side of LitScript: decode bytecode into parser state and game data."""

from litscript.script.eval import EvalStatus, Evaluator, format_log_line, load_game_data
from litscript.script.state import GameData, ParserState

__all__ = [
    "EvalStatus",
    "Evaluator",
    "GameData",
    "ParserState",
    "format_log_line",
    "load_game_data",
]
