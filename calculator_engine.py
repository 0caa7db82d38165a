"""
Motor de cálculo para la calculadora científica.

Este módulo reúne las piezas puras que usa la máquina de estados:
el constructor del namespace según el modo angular, el adaptador
que valida el resultado del evaluador y el formateador que convierte
un número en la cadena canónica de la pantalla.

Contrato de interfaz:
    - build_scope(angle_mode: AngleMode) -> dict
    - evaluate_expression(expression: str, scope: dict) -> float
    - format_number(value) -> str
"""

import enum
import logging
import math
import re
from decimal import Context, ROUND_HALF_UP

from formula_evaluator import FormulaEvaluator

logger = logging.getLogger(__name__)


ERROR_TOKEN = "Error"
SCIENTIFIC_LOWER_LIMIT = 1e-6
SCIENTIFIC_UPPER_LIMIT = 1e9
SCIENTIFIC_FRACTION_DIGITS = 8
SIGNIFICANT_DIGITS = 12


class AngleMode(enum.Enum):
    DEGREES = "DEG"
    RADIANS = "RAD"

    @property
    def label(self) -> str:
        return self.value

    def toggled(self) -> "AngleMode":
        if self is AngleMode.DEGREES:
            return AngleMode.RADIANS
        return AngleMode.DEGREES


class InvalidExpressionError(Exception):
    """La expresión no produjo un número real finito."""


# ── Namespace de evaluación ──────────────────────────────────────

def build_scope(angle_mode: AngleMode) -> dict:
    """Construye las constantes y funciones visibles para el evaluador.

    Se crea un diccionario nuevo en cada llamada: el modo angular queda
    capturado por las funciones trigonométricas y no se comparte estado
    entre evaluaciones.
    """
    degrees = angle_mode is AngleMode.DEGREES

    def _trig(fn):
        def w(x):
            return fn(x * math.pi / 180 if degrees else x)

        return w

    return {
        "pi": math.pi,
        "e": math.e,
        "E": math.e,
        "sin": _trig(math.sin),
        "cos": _trig(math.cos),
        "tan": _trig(math.tan),
        "ln": math.log,
        "log10": math.log10,
        "sqrt": math.sqrt,
        "abs": abs,
    }


# ── Evaluación ───────────────────────────────────────────────────

_evaluator = FormulaEvaluator()


def evaluate_expression(expression: str, scope: dict) -> float:
    """Evalúa la expresión y devuelve un float finito.

    Raises:
        InvalidExpressionError: error de sintaxis, error aritmético,
            resultado no real o no finito.
    """
    try:
        value = _evaluator.evaluate(expression, scope)
    except (ValueError, ArithmeticError, TypeError, RecursionError) as exc:
        raise InvalidExpressionError(f"{expression!r}: {exc}") from exc

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidExpressionError(f"{expression!r}: resultado no numérico") from exc

    if not math.isfinite(number):
        raise InvalidExpressionError(f"{expression!r}: resultado no finito")
    return number


# ── Formato del resultado ────────────────────────────────────────

_ROUNDING = Context(prec=SIGNIFICANT_DIGITS, rounding=ROUND_HALF_UP)
_EXPONENT_RE = re.compile(r"e([+-])0*(\d+)$")


def format_number(value) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return ERROR_TOKEN

    if not math.isfinite(number):
        return ERROR_TOKEN
    if number == 0:
        return "0"

    # límites comparados contra la mantisa ya redondeada
    text = f"{number:.{SCIENTIFIC_FRACTION_DIGITS}e}"
    magnitude = abs(float(text))
    if magnitude < SCIENTIFIC_LOWER_LIMIT or magnitude > SCIENTIFIC_UPPER_LIMIT:
        return _EXPONENT_RE.sub(
            lambda m: "e" + ("-" if m.group(1) == "-" else "") + m.group(2),
            text,
        )

    # repr() da el decimal más corto que reproduce el float, así 1.005
    # redondea como 1.01 y no como 1.00
    rounded = _ROUNDING.create_decimal(repr(number))
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
