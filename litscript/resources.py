"""Generational resource dictionary.

Materials are inserted once, at dependency resolution time, and keep their id
for the life of the dictionary. Renderer resources are built lazily from them
by :meth:`ResourceDictionary.load` and evicted when two consecutive frame
generations have not used them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from litscript.errors import MissingMaterial, MissingResource
from litscript.material import ImageMaterial
from litscript.renderer import Renderer, SoftwareRenderer

logger = logging.getLogger(__name__)


class ResourceKind(Enum):
    IMAGE = "image"


@dataclass(frozen=True)
class DependencyDescriptor:
    kind: ResourceKind
    var_id: int


class ResourceDictionary:
    def __init__(self, renderer: Optional[Renderer] = None):
        self.renderer: Renderer = renderer if renderer is not None else SoftwareRenderer()
        self.next_id = 0
        self.materials: Dict[ResourceKind, Dict[int, ImageMaterial]] = {
            kind: {} for kind in ResourceKind
        }
        self.resources: Dict[ResourceKind, Dict[int, Any]] = {
            kind: {} for kind in ResourceKind
        }
        self.loaded_ids: List[int] = []
        self.prev_loaded_ids: List[int] = []

    def add_material(
        self, material: ImageMaterial, kind: ResourceKind = ResourceKind.IMAGE
    ) -> int:
        res_id = self.next_id
        self.next_id += 1
        self.materials[kind][res_id] = material
        return res_id

    def get_material(
        self, res_id: int, kind: ResourceKind = ResourceKind.IMAGE
    ) -> ImageMaterial:
        try:
            return self.materials[kind][res_id]
        except KeyError as exc:
            raise MissingMaterial(res_id) from exc

    def material_ids(self, kind: ResourceKind = ResourceKind.IMAGE) -> List[int]:
        return sorted(self.materials[kind])

    def is_resident(self, res_id: int, kind: ResourceKind = ResourceKind.IMAGE) -> bool:
        return res_id in self.resources[kind]

    def get_resource(self, res_id: int, kind: ResourceKind = ResourceKind.IMAGE) -> Any:
        try:
            return self.resources[kind][res_id]
        except KeyError as exc:
            raise MissingResource(res_id) from exc

    def load(self, res_id: int, kind: ResourceKind = ResourceKind.IMAGE) -> Any:
        """Return the resource for ``res_id``, building it on first use.

        Marks ``res_id`` as used by the current generation.
        """
        subdict = self.resources[kind]
        if res_id not in subdict:
            material = self.get_material(res_id, kind)
            material.prepare()
            subdict[res_id] = self.renderer.build_resource(material)
            logger.debug("Built %s resource %d from %s", kind.value, res_id, material)

        if res_id not in self.loaded_ids:
            self.loaded_ids.append(res_id)
        return subdict[res_id]

    def swap_generation(self) -> None:
        self.prev_loaded_ids = self.loaded_ids
        self.loaded_ids = []

    def clean(self) -> List[int]:
        """Evict resources unused by both the current and previous generation.

        Returns:
            Ids of the evicted resources.
        """
        keep = set(self.loaded_ids) | set(self.prev_loaded_ids)
        evicted: List[int] = []
        for kind, subdict in self.resources.items():
            for res_id in [i for i in subdict if i not in keep]:
                self.renderer.release_resource(subdict.pop(res_id))
                evicted.append(res_id)
                logger.info("Evicted %s resource %d", kind.value, res_id)
        return evicted

    def end_frame(self) -> List[int]:
        self.swap_generation()
        return self.clean()
