"""Eventos de entrada de la calculadora: uno por tipo de botón."""

import enum
from dataclasses import dataclass
from typing import Optional


class EventKind(enum.Enum):
    APPEND = "append"
    RESET = "reset"
    BACKSPACE = "backspace"
    NEGATE = "negate"
    PERCENT = "percent"
    POWER_SQUARE = "power-square"
    POWER_INFIX = "power-infix"
    FACTORIAL = "factorial"
    MEMORY_CLEAR = "memory-clear"
    MEMORY_RECALL = "memory-recall"
    MEMORY_ADD = "memory-add"
    MEMORY_SUBTRACT = "memory-subtract"
    TOGGLE_ANGLE_MODE = "toggle-angle-mode"
    SUBMIT = "submit"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    token: Optional[str] = None

    @classmethod
    def append(cls, token: str) -> "Event":
        return cls(EventKind.APPEND, token)
