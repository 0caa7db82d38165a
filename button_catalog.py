"""Catálogo estático de botones de la calculadora.

Cada entrada es (texto, evento, tipo_color). La capa de presentación
decide cómo dibujarlas; aquí solo se declara qué evento dispara cada una.
tipo_color: "num", "op", "func", "special", "equals", "memory", "toggle"
"""

from typing import NamedTuple

from calculator_events import Event, EventKind


class Button(NamedTuple):
    label: str
    event: Event
    kind: str


def _insert(label: str, token: str, kind: str) -> Button:
    return Button(label, Event.append(token), kind)


def _action(label: str, event_kind: EventKind, kind: str) -> Button:
    return Button(label, Event(event_kind), kind)


# ── Teclado principal (4 columnas) ───────────────────────────────

PRIMARY_BUTTONS = [
    _action("AC", EventKind.RESET, "special"),
    _action("⌫", EventKind.BACKSPACE, "special"),       # ⌫
    _action("%", EventKind.PERCENT, "special"),
    _insert("÷", "/", "op"),                             # ÷

    _insert("7", "7", "num"), _insert("8", "8", "num"),
    _insert("9", "9", "num"), _insert("×", "*", "op"),   # ×

    _insert("4", "4", "num"), _insert("5", "5", "num"),
    _insert("6", "6", "num"), _insert("−", "-", "op"),   # −

    _insert("1", "1", "num"), _insert("2", "2", "num"),
    _insert("3", "3", "num"), _insert("+", "+", "op"),

    _action("±", EventKind.NEGATE, "special"),           # ±
    _insert("0", "0", "num"), _insert(".", ".", "num"),
    _action("=", EventKind.SUBMIT, "equals"),
]

# ── Panel científico (5 columnas) ────────────────────────────────

SCIENTIFIC_BUTTONS = [
    _insert("sin", "sin(", "func"),
    _insert("cos", "cos(", "func"),
    _insert("tan", "tan(", "func"),
    _insert("ln", "ln(", "func"),
    _insert("log", "log10(", "func"),

    _insert("√", "sqrt(", "func"),                       # √
    _action("x²", EventKind.POWER_SQUARE, "func"),       # x²
    _action("xʸ", EventKind.POWER_INFIX, "func"),        # xʸ
    _insert("|x|", "abs(", "func"),
    _insert("π", "pi", "func"),                          # π

    _insert("e", "e", "func"),
    _insert("(", "(", "func"),
    _insert(")", ")", "func"),
    _action("!", EventKind.FACTORIAL, "func"),
    _insert("Exp", "E", "func"),
]

# ── Memoria y modo angular ───────────────────────────────────────

MEMORY_BUTTONS = [
    _action("MC", EventKind.MEMORY_CLEAR, "memory"),
    _action("MR", EventKind.MEMORY_RECALL, "memory"),
    _action("M+", EventKind.MEMORY_ADD, "memory"),
    _action("M-", EventKind.MEMORY_SUBTRACT, "memory"),
]

MODE_TOGGLE = _action("DEG/RAD", EventKind.TOGGLE_ANGLE_MODE, "toggle")

ALL_BUTTONS = PRIMARY_BUTTONS + SCIENTIFIC_BUTTONS + MEMORY_BUTTONS + [MODE_TOGGLE]

# Alias ASCII para teclear en el arnés de texto
ALIASES = {
    "/": "÷",
    "*": "×",
    "-": "−",
    "<-": "⌫",
    "+/-": "±",
    "sqrt": "√",
    "x^2": "x²",
    "^": "xʸ",
    "pi": "π",
    "abs": "|x|",
    "mode": "DEG/RAD",
}

_BY_LABEL = {button.label: button for button in ALL_BUTTONS}


def find_button(label: str) -> Button:
    """Busca un botón por su texto o por su alias ASCII.

    Raises:
        KeyError: no existe un botón con ese texto.
    """
    label = ALIASES.get(label, label)
    try:
        return _BY_LABEL[label]
    except KeyError:
        raise KeyError(f"Botón desconocido: {label}") from None
