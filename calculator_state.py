"""
Máquina de estados de la calculadora.

Cada pulsación de botón llega como un ``Event``; ``transition`` recibe
el estado actual y devuelve el estado siguiente sin efectos laterales.
``Calculator`` es el dueño de la sesión: guarda el estado vigente y es
el único que lo reemplaza.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from button_catalog import find_button
from calculator_engine import (
    AngleMode,
    InvalidExpressionError,
    build_scope,
    evaluate_expression,
    format_number,
)
from calculator_events import Event, EventKind

logger = logging.getLogger(__name__)


CALCULATION_ERROR = "calculation error"
MEMORY_ERROR = "memory failed"


@dataclass(frozen=True)
class CalculatorState:
    expression: str = "0"
    display: str = "0"
    memory: float = 0.0
    angle_mode: AngleMode = AngleMode.RADIANS
    error: Optional[str] = None
    last_expression: Optional[str] = None


@dataclass(frozen=True)
class DisplaySnapshot:
    """Vista de solo lectura para la capa de presentación."""

    display: str
    expression: str
    error: Optional[str]
    last_expression: Optional[str]
    memory_indicator: bool
    angle_label: str

    @property
    def show_expression(self) -> bool:
        return self.expression != self.display

    @property
    def primary_text(self) -> str:
        return self.error if self.error else self.display

    @classmethod
    def of(cls, state: CalculatorState) -> "DisplaySnapshot":
        return cls(
            display=state.display,
            expression=state.expression,
            error=state.error,
            last_expression=state.last_expression,
            memory_indicator=state.memory != 0,
            angle_label=state.angle_mode.label,
        )


# ── Reglas de edición ────────────────────────────────────────────

def append_token(expression: str, token: str) -> str:
    """Aplica la regla del cero inicial y la del punto repetido."""
    if expression == "0":
        if token == ".":
            return "0."
        # números, constantes y cualquier otro token reemplazan el "0"
        return token

    if token == "." and expression.endswith("."):
        return expression
    return expression + token


def backspace(expression: str) -> str:
    if len(expression) <= 1:
        return "0"
    return expression[:-1]


def negate(expression: str) -> str:
    if expression.startswith("-"):
        return expression[1:] or "0"
    if expression == "0":
        return expression
    return "-" + expression


def memory_token(memory: float) -> str:
    """Cadena decimal del registro de memoria, tal como se teclearía."""
    if float(memory).is_integer() and abs(memory) < 1e16:
        return str(int(memory))
    return repr(memory)


def _clear_transient(state: CalculatorState) -> CalculatorState:
    return dataclasses.replace(state, error=None, last_expression=None)


def _edit(state: CalculatorState, expression: str) -> CalculatorState:
    return dataclasses.replace(
        state,
        expression=expression,
        display=expression,
        error=None,
        last_expression=None,
    )


# ── Transiciones con evaluación ──────────────────────────────────

def _percent(state: CalculatorState) -> CalculatorState:
    state = _clear_transient(state)
    try:
        value = evaluate_expression(
            f"({state.expression})/100", build_scope(state.angle_mode)
        )
    except InvalidExpressionError as exc:
        logger.info("Porcentaje fallido: %s", exc)
        return dataclasses.replace(state, error=CALCULATION_ERROR)

    formatted = format_number(value)
    return dataclasses.replace(state, expression=formatted, display=formatted)


def _memory_update(state: CalculatorState, sign: int) -> CalculatorState:
    try:
        value = evaluate_expression(state.expression, build_scope(state.angle_mode))
    except InvalidExpressionError as exc:
        logger.info("Operación de memoria fallida: %s", exc)
        return dataclasses.replace(state, error=MEMORY_ERROR)

    return dataclasses.replace(state, memory=state.memory + sign * value)


def _submit(state: CalculatorState) -> CalculatorState:
    try:
        value = evaluate_expression(state.expression, build_scope(state.angle_mode))
    except InvalidExpressionError as exc:
        logger.info("Cálculo fallido: %s", exc)
        return dataclasses.replace(state, error=CALCULATION_ERROR)

    formatted = format_number(value)
    return dataclasses.replace(
        state,
        expression=formatted,
        display=formatted,
        error=None,
        last_expression=state.expression,
    )


def transition(state: CalculatorState, event: Event) -> CalculatorState:
    """Devuelve el estado que resulta de aplicar ``event`` a ``state``.

    Las acciones de edición limpian ``error`` y ``last_expression``; las
    acciones de memoria (salvo MR, que teclea su valor) y el cambio de
    modo angular los conservan.

    Raises:
        ValueError: tipo de evento desconocido.
    """
    kind = event.kind

    if kind is EventKind.APPEND:
        if not event.token:
            return state
        return _edit(state, append_token(state.expression, event.token))
    if kind is EventKind.RESET:
        return dataclasses.replace(
            state, expression="0", display="0", error=None, last_expression=None
        )
    if kind is EventKind.BACKSPACE:
        return _edit(state, backspace(state.expression))
    if kind is EventKind.NEGATE:
        return _edit(state, negate(state.expression))
    if kind is EventKind.PERCENT:
        return _percent(state)
    if kind is EventKind.POWER_SQUARE:
        return _edit(state, f"({state.expression})^2")
    if kind is EventKind.POWER_INFIX:
        return _edit(state, state.expression + "^")
    if kind is EventKind.FACTORIAL:
        return _edit(state, state.expression + "!")
    if kind is EventKind.MEMORY_CLEAR:
        return dataclasses.replace(state, memory=0.0)
    if kind is EventKind.MEMORY_RECALL:
        return _edit(state, append_token(state.expression, memory_token(state.memory)))
    if kind is EventKind.MEMORY_ADD:
        return _memory_update(state, 1)
    if kind is EventKind.MEMORY_SUBTRACT:
        return _memory_update(state, -1)
    if kind is EventKind.TOGGLE_ANGLE_MODE:
        return dataclasses.replace(state, angle_mode=state.angle_mode.toggled())
    if kind is EventKind.SUBMIT:
        return _submit(state)

    raise ValueError(f"Evento desconocido: {kind!r}")


# ── Sesión ───────────────────────────────────────────────────────

class Calculator:
    """Sesión de la calculadora: único dueño del estado vigente."""

    def __init__(self, angle_mode: AngleMode = AngleMode.RADIANS):
        self._state = CalculatorState(angle_mode=angle_mode)

    @property
    def state(self) -> CalculatorState:
        return self._state

    def dispatch(self, event: Event) -> CalculatorState:
        logger.debug("Evento %s %r sobre %r", event.kind.value, event.token, self._state.expression)
        self._state = transition(self._state, event)
        return self._state

    def press(self, label: str) -> CalculatorState:
        """Despacha el evento del botón con la etiqueta ``label``."""
        return self.dispatch(find_button(label).event)

    def snapshot(self) -> DisplaySnapshot:
        return DisplaySnapshot.of(self._state)
