from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from litscript.bytecode import (
    NUMERIC_TYPES,
    BytecodeObject,
    DataType,
    MaterialValue,
    Numeric8,
    Numeric16,
    Numeric32,
    StrValue,
    TupleValue,
    VarInvocation,
    direct_data_type,
)
from litscript.color import Color
from litscript.errors import (
    ColorIndexNotFound,
    DependencyCycle,
    IncorrectDataType,
    VariableNotFound,
)
from litscript.material import ImageMaterial
from litscript.resources import DependencyDescriptor


@dataclass
class GameData:
    name: str = "Unnamed"


class ParserState:
    """
    Runtime symbol tables filled by the evaluator.
    """

    def __init__(self):
        self.variables: Dict[int, BytecodeObject] = {}
        self.dependency_relations: Dict[int, List[DependencyDescriptor]] = {}
        self.color_ids: Dict[Tuple[int, int], Color] = {}
        self.pending_material_ids: List[int] = []

    def register_variable(self, var_id: int, obj: BytecodeObject) -> None:
        self.variables[var_id] = obj

    def get_variable(self, var_id: int) -> BytecodeObject:
        try:
            return self.variables[var_id]
        except KeyError as exc:
            raise VariableNotFound(var_id) from exc

    def consume_variable(self, var_id: int) -> BytecodeObject:
        try:
            return self.variables.pop(var_id)
        except KeyError as exc:
            raise VariableNotFound(var_id) from exc

    def add_dependency(self, var_id: int, descriptor: DependencyDescriptor) -> None:
        self.dependency_relations.setdefault(var_id, []).append(descriptor)

    def dependencies_of(self, var_id: int) -> List[DependencyDescriptor]:
        return self.dependency_relations.get(var_id, [])

    def register_color(self, object_id: int, index: int, color: Color) -> None:
        self.color_ids[(object_id, index)] = color

    def get_color(self, object_id: int, index: int) -> Color:
        try:
            return self.color_ids[(object_id, index)]
        except KeyError as exc:
            raise ColorIndexNotFound(object_id, index) from exc

    def add_pending_material(self, var_id: int) -> None:
        if var_id not in self.pending_material_ids:
            self.pending_material_ids.append(var_id)

    # Resolution

    def resolve_id(self, var_id: int) -> int:
        """Follow alias bindings from ``var_id`` to the id holding a concrete value."""
        seen: List[int] = []
        seen_set: Set[int] = set()
        while True:
            if var_id in seen_set:
                raise DependencyCycle(seen + [var_id])
            seen.append(var_id)
            seen_set.add(var_id)
            obj = self.get_variable(var_id)
            if not isinstance(obj, VarInvocation):
                return var_id
            var_id = obj.var_id

    def resolve(self, obj: BytecodeObject) -> BytecodeObject:
        if isinstance(obj, VarInvocation):
            return self.get_variable(self.resolve_id(obj.var_id))
        return obj

    def data_type(self, obj: BytecodeObject) -> DataType:
        return direct_data_type(self.resolve(obj))

    # Coercions

    def as_number(self, obj: BytecodeObject) -> int:
        value = self.resolve(obj)
        if isinstance(value, (Numeric8, Numeric16, Numeric32)):
            return value.value
        raise IncorrectDataType(direct_data_type(value), "Numeric")

    def as_string(self, obj: BytecodeObject) -> str:
        value = self.resolve(obj)
        if isinstance(value, StrValue):
            return value.value
        raise IncorrectDataType(direct_data_type(value), DataType.STR)

    def as_tuple(self, obj: BytecodeObject) -> Tuple[BytecodeObject, ...]:
        value = self.resolve(obj)
        if isinstance(value, TupleValue):
            return value.items
        raise IncorrectDataType(direct_data_type(value), DataType.TUPLE)

    def as_material(self, obj: BytecodeObject) -> ImageMaterial:
        value = self.resolve(obj)
        if isinstance(value, MaterialValue):
            return value.material
        raise IncorrectDataType(direct_data_type(value), DataType.MATERIAL)

    def is_numeric(self, obj: BytecodeObject) -> bool:
        return self.data_type(obj) in NUMERIC_TYPES

    def stringify(self, obj: BytecodeObject) -> str:
        value = self.resolve(obj)
        if isinstance(value, (Numeric8, Numeric16, Numeric32)):
            return str(value.value)
        if isinstance(value, StrValue):
            return value.value
        if isinstance(value, TupleValue):
            return "(" + ", ".join(self.stringify(item) for item in value.items) + ")"
        if isinstance(value, MaterialValue):
            return str(value.material)
        raise AssertionError(f"Cannot stringify {value!r}")
