import logging
from typing import Any, BinaryIO, Callable, Dict, Optional

from litscript.renderer import Renderer
from litscript.resolver import resolve_dependencies
from litscript.resources import ResourceDictionary, ResourceKind
from litscript.script.eval import load_game_data
from litscript.script.state import GameData

logger = logging.getLogger(__name__)


class Game:
    """A loaded game: its data plus the resource dictionary the renderer draws from."""

    def __init__(self, data: GameData, resources: ResourceDictionary):
        self.data = data
        self.resources = resources
        self.frame = 0

    @property
    def name(self) -> str:
        return self.data.name

    def get_resource(self, res_id: int, kind: ResourceKind = ResourceKind.IMAGE) -> Any:
        return self.resources.load(res_id, kind)

    def end_frame(self) -> None:
        self.resources.end_frame()
        self.frame += 1


def load_game(
    stream: BinaryIO,
    renderer: Optional[Renderer] = None,
    *,
    log_sink: Callable[[str], None] = print,
) -> Game:
    """Evaluate a compiled stream and resolve its materials into a :class:`Game`.

    Any decode, evaluation or resolution error propagates; no partially loaded
    game is returned.
    """
    data, state = load_game_data(stream, log_sink=log_sink)
    resources = resolve_dependencies(state, ResourceDictionary(renderer))
    logger.info(
        "Loaded game '%s' with %d material(s)", data.name, resources.next_id
    )
    return Game(data, resources)


def game_to_dict(game: Game) -> Dict[str, Any]:
    """Serialize a loaded game into a JSON-compatible summary."""
    materials = []
    for res_id in game.resources.material_ids():
        material = game.resources.get_material(res_id)
        materials.append(
            {
                "id": res_id,
                "width": material.width,
                "height": material.height,
                "background": list(material.background_color.as_rgba()),
                "draws": len(material.draws),
                "dependencies": list(material.dependencies),
                "resident": game.resources.is_resident(res_id),
            }
        )
    return {
        "name": game.name,
        "frame": game.frame,
        "materials": materials,
    }
