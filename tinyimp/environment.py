from typing import Any, Dict, Optional
from tinyimp.ast import FuncDecl
from tinyimp.errors import TinyError
from tinyimp.types import ErrorVal


class Environment:
    """One execution scope: variable bindings, their declared types and the
    registered functions.

    Environments have no parent. A function call gets a brand new one that
    shares the caller's function table, so only its parameters and the
    registered functions are visible inside the body.
    """
    def __init__(self, functions: Optional[Dict[str, FuncDecl]] = None):
        self.values: Dict[str, Any] = {}
        self.types: Dict[str, str] = {}
        self.functions: Dict[str, FuncDecl] = functions if functions is not None else {}

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        raise TinyError(ErrorVal('UndefinedVariable', f'undefined variable {name}'))

    def set(self, name: str, value: Any):
        # assignment never declares
        if name not in self.values:
            raise TinyError(ErrorVal('UndefinedVariable', f'undefined variable {name}'))
        self.values[name] = value

    def declare(self, name: str, type_name: str, value: Any):
        # redeclaration replaces both the value and the type tag
        self.values[name] = value
        self.types[name] = type_name

    def define_function(self, func: FuncDecl):
        self.functions[func.name] = func

    def get_function(self, name: str) -> Optional[FuncDecl]:
        return self.functions.get(name)

    def snapshot(self) -> Dict[str, Any]:
        return dict(self.values)
