"""Parseo y evaluación de expresiones para la calculadora científica.

El evaluador es de propósito general: recibe una cadena y un namespace
de nombres (constantes y funciones) y devuelve el valor numérico. Las
reglas de la calculadora (modo angular, formato, errores de usuario)
viven fuera de este módulo.
"""

from __future__ import annotations

import math
import re

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


def _factorial(x):
    value = mp.mpf(x)
    if not mp.isfinite(value):
        raise ValueError("factorial no admite infinito o NaN")
    if value < 0:
        raise ValueError("factorial requiere un valor no negativo")

    # Para no enteros x! = gamma(x + 1)
    return float(mp.factorial(value))


def _gamma(x):
    return float(mp.gamma(mp.mpf(x)))


def default_namespace() -> dict:
    """Funciones y constantes que el evaluador conoce por defecto."""
    return {
        "sin": math.sin,
        "cos": math.cos,
        "tan": math.tan,
        "asin": math.asin,
        "acos": math.acos,
        "atan": math.atan,
        "exp": math.exp,
        "log": math.log,
        "log10": math.log10,
        "ln": math.log,
        "sqrt": math.sqrt,
        "abs": abs,
        "factorial": _factorial,
        "gamma": _gamma,
        "pi": math.pi,
        "e": math.e,
        "E": math.e,
    }


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico."""

    _TOKEN_RE = re.compile(
        r"\s*(?:"
        r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?)"
        r"|(?P<name>[A-Za-z_][A-Za-z_0-9]*)"
        r"|(?P<op>[+\-*/^!(),])"
        r")"
    )
    _FACTORIAL_NAME = "_factorial"

    def __init__(self, namespace: dict | None = None):
        self._defaults = dict(namespace) if namespace is not None else default_namespace()

    def evaluate(self, expression: str, scope: dict | None = None):
        """Evalúa la expresión con el namespace por defecto más ``scope``.

        Raises:
            ValueError: expresión vacía, sintaxis inválida o nombre desconocido.
            ArithmeticError: división por cero, desbordamiento, etc.
        """
        if not expression or not expression.strip():
            raise ValueError("Expresión vacía")

        namespace = dict(self._defaults)
        if scope:
            namespace.update(scope)

        processed = self.translate(expression, namespace)
        namespace[self._FACTORIAL_NAME] = _factorial

        try:
            return eval(processed, {"__builtins__": {}}, namespace)
        except SyntaxError as exc:
            raise ValueError("Error de sintaxis") from exc
        except NameError as exc:
            raise ValueError(f"Desconocido: {exc}") from exc

    def translate(self, expression: str, namespace: dict) -> str:
        """Convierte la expresión de la calculadora a una expresión Python."""
        tokens = self._tokenize(expression)
        self._validate_identifiers(tokens, namespace)
        tokens = self._insert_implicit_mult(tokens, namespace)
        tokens = self._replace_factorial(tokens, namespace)
        return " ".join(self._emit(kind, text) for kind, text in tokens)

    # ── Análisis léxico ──────────────────────────────────────────

    def _tokenize(self, expression: str) -> list[tuple[str, str]]:
        tokens = []
        pos = 0
        end = len(expression)

        while pos < end:
            if expression[pos:].isspace():
                break
            match = self._TOKEN_RE.match(expression, pos)
            if match is None or match.end() == pos:
                raise ValueError(
                    f"Carácter no permitido en la posición {pos}: {expression[pos]!r}"
                )
            kind = match.lastgroup
            tokens.append((kind, match.group(kind)))
            pos = match.end()

        if not tokens:
            raise ValueError("Expresión vacía")
        return tokens

    @staticmethod
    def _validate_identifiers(tokens, namespace: dict):
        for i, (kind, text) in enumerate(tokens):
            if kind != "name":
                continue
            if text not in namespace:
                raise ValueError(f"Identificador no permitido: {text}")

            followed_by_paren = i + 1 < len(tokens) and tokens[i + 1] == ("op", "(")
            if callable(namespace[text]) and not followed_by_paren:
                raise ValueError(f"Falta '(' después de {text}")
            if not callable(namespace[text]) and followed_by_paren:
                raise ValueError(f"{text} no es una función")

    # ── Reescrituras ─────────────────────────────────────────────

    @staticmethod
    def _ends_operand(token, namespace: dict) -> bool:
        kind, text = token
        if kind == "number":
            return True
        if kind == "name":
            return not callable(namespace[text])
        return text in (")", "!")

    @staticmethod
    def _starts_operand(token) -> bool:
        kind, text = token
        return kind in ("number", "name") or text == "("

    def _insert_implicit_mult(self, tokens, namespace: dict):
        result = []
        for token in tokens:
            if (
                result
                and self._ends_operand(result[-1], namespace)
                and self._starts_operand(token)
                and not (result[-1][0] == "number" and token[0] == "number")
            ):
                result.append(("op", "*"))
            result.append(token)
        return result

    def _replace_factorial(self, tokens, namespace: dict):
        out: list[tuple[str, str]] = []

        for token in tokens:
            if token != ("op", "!"):
                out.append(token)
                continue

            if not out:
                raise ValueError("Falta operando para '!'")

            kind, text = out[-1]
            if text == ")":
                depth = 0
                start = len(out) - 1
                while start >= 0:
                    if out[start] == ("op", ")"):
                        depth += 1
                    elif out[start] == ("op", "("):
                        depth -= 1
                        if depth == 0:
                            break
                    start -= 1
                if start < 0:
                    raise ValueError("Paréntesis desbalanceados")
                if start > 0 and out[start - 1][0] == "name":
                    start -= 1
            elif kind == "number" or (kind == "name" and not callable(namespace[text])):
                start = len(out) - 1
            else:
                raise ValueError("Falta operando para '!'")

            operand = out[start:]
            del out[start:]
            out.append(("name", self._FACTORIAL_NAME))
            out.append(("op", "("))
            out.extend(operand)
            out.append(("op", ")"))

        return out

    @staticmethod
    def _emit(kind: str, text: str) -> str:
        if kind == "number":
            value = float(text)
            if math.isinf(value):
                raise OverflowError(f"Literal fuera de rango: {text}")
            return repr(value)
        if text == "^":
            return "**"
        return text
