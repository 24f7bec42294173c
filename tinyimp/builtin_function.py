from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class BuiltinFunction:
    """A function implemented by the interpreter itself.

    `fn` receives the unevaluated argument expressions and the caller's
    environment, so a builtin decides when each argument is evaluated.
    An `arity` of None accepts any number of arguments.
    """
    name: str
    arity: Optional[int]
    fn: Any

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
