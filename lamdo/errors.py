from __future__ import annotations

from typing import Any

from lamdo.syntax import Posn


class EvaluationError(RuntimeError):
    """Fatal failure of an evaluator that has no failure channel."""

    def __init__(self, message: str, pos: Posn) -> None:
        self.pos = pos
        line, column = pos
        super().__init__(f"{message} at {line}:{column}")


class UnboundVariableError(EvaluationError):
    def __init__(self, name: str, pos: Posn) -> None:
        self.name = name
        super().__init__(
            f"Unbound variable: {name!r}\n"
            f"Hint: bind it with an enclosing Abs or pass it in the initial environment",
            pos,
        )


class NotAClosureError(EvaluationError):
    def __init__(self, value: Any, pos: Posn) -> None:
        self.value = value
        super().__init__(f"Value must be a closure, got {value!r}", pos)


class NotANumberError(EvaluationError):
    def __init__(self, values: tuple[Any, Any], pos: Posn) -> None:
        self.values = values
        super().__init__(f"Values must be numbers, got {values[0]!r} and {values[1]!r}", pos)


__all__ = [
    "EvaluationError",
    "UnboundVariableError",
    "NotAClosureError",
    "NotANumberError",
]
