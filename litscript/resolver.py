import logging
from typing import Dict, List, Optional, Set

from litscript.bytecode import MaterialValue, direct_data_type
from litscript.errors import DependencyCycle, IncorrectDataType
from litscript.resources import ResourceDictionary
from litscript.script.state import ParserState

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Move pending materials out of a parser state into a resource dictionary.

    Dependencies are resolved depth-first before their dependents, so a
    dependency always receives a smaller resource id. A material reached twice
    (shared dependency) is inserted once and its id reused. Cycles raise
    :class:`~litscript.errors.DependencyCycle`.

    Every ``create_tex`` variable is also pending, so a dependency is visited
    again after its variable has been consumed. The memo in :attr:`resolved`
    answers that visit; only a variable that was never resolved and is no
    longer bound raises :class:`~litscript.errors.VariableNotFound`.
    """

    def __init__(self, state: ParserState, dictionary: ResourceDictionary):
        self.state = state
        self.dictionary = dictionary
        self.resolved: Dict[int, int] = {}
        self._resolving: List[int] = []
        self._resolving_set: Set[int] = set()

    def resolve_all(self) -> ResourceDictionary:
        for var_id in list(self.state.pending_material_ids):
            self.resolve(var_id)
        self.state.pending_material_ids.clear()
        return self.dictionary

    def resolve(self, var_id: int) -> int:
        if var_id in self.resolved:
            return self.resolved[var_id]
        if var_id in self._resolving_set:
            start = self._resolving.index(var_id)
            raise DependencyCycle(self._resolving[start:] + [var_id])

        self._resolving.append(var_id)
        self._resolving_set.add(var_id)
        try:
            dependency_ids = tuple(
                self.resolve(descriptor.var_id)
                for descriptor in self.state.dependencies_of(var_id)
            )

            obj = self.state.consume_variable(var_id)
            if not isinstance(obj, MaterialValue):
                raise IncorrectDataType(direct_data_type(obj), "Material")
            material = obj.material.with_dependencies(dependency_ids)
            res_id = self.dictionary.add_material(material)
        finally:
            self._resolving.pop()
            self._resolving_set.discard(var_id)

        self.resolved[var_id] = res_id
        logger.debug(
            "Variable %d resolved to resource %d (dependencies: %s)",
            var_id,
            res_id,
            list(dependency_ids),
        )
        return res_id


def resolve_dependencies(
    state: ParserState,
    dictionary: Optional[ResourceDictionary] = None,
) -> ResourceDictionary:
    """Resolve every pending material of ``state`` into ``dictionary``."""
    if dictionary is None:
        dictionary = ResourceDictionary()
    return DependencyResolver(state, dictionary).resolve_all()
