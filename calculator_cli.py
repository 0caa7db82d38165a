"""Arnés de texto: pulsa botones por su etiqueta y muestra la pantalla.

Cada línea de entrada es una secuencia de etiquetas separadas por
espacios (``5 + 3 =``). Tras cada línea se imprime el snapshot.
``quit`` termina la sesión.
"""

from __future__ import annotations

import sys

from calculator_state import Calculator, DisplaySnapshot


def render(snap: DisplaySnapshot) -> str:
    """Texto de la pantalla en una sola línea."""
    parts = [f"[{snap.angle_label}]"]
    if snap.memory_indicator:
        parts.append("[M]")
    if snap.last_expression:
        parts.append(f"{snap.last_expression} =")
    if snap.show_expression:
        parts.append(f"({snap.expression})")
    parts.append(snap.primary_text)
    return " ".join(parts)


def run(calculator: Calculator, lines, out=None) -> Calculator:
    out = out if out is not None else sys.stdout
    for line in lines:
        labels = line.split()
        if not labels:
            continue
        if labels == ["quit"]:
            break
        for label in labels:
            try:
                calculator.press(label)
            except KeyError as exc:
                print(exc.args[0], file=out)
        print(render(calculator.snapshot()), file=out)
    return calculator


def main(calculator: Calculator | None = None) -> None:
    calculator = calculator if calculator is not None else Calculator()
    print("Calculadora científica (texto). Etiquetas separadas por espacios; 'quit' para salir.")
    print(render(calculator.snapshot()))
    run(calculator, sys.stdin)


if __name__ == "__main__":  # pragma: no cover
    main()
