import warnings
from typing import Dict

from litscript.errors import VariableNotFound


class VariableTable:
    """
    Maps variable names to the numeric ids written into bytecode.
    """

    def __init__(self):
        self.variables: Dict[str, int] = {}
        self.current_id = 1

    def register_variable(self, name: str) -> int:
        if name in self.variables:
            warnings.warn(
                f"Variable '{name}' is redefined; later references use the new binding.",
                stacklevel=2,
            )
        var_id = self.current_id
        self.variables[name] = var_id
        self.current_id += 1
        return var_id

    def get_variable_id(self, name: str) -> int:
        try:
            return self.variables[name]
        except KeyError as exc:
            raise VariableNotFound(name) from exc

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)
