from typing import Any
from tinyimp.types import ErrorVal


class TinyError(Exception):
    """Exception type used to propagate Tinyimp runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def kind(self) -> str:
        return self.err.name


class ParseError(Exception):
    """Raised by the front end when source text is not a valid program."""


class ReturnSignal:
    """Result of executing a return statement.

    Block execution hands this back to its caller instead of None so that
    enclosing blocks stop and pass it upwards.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
