"""Punto de entrada de la calculadora científica."""

import logging
import sys

from calculator_engine import AngleMode
from calculator_state import Calculator


INITIAL_ANGLE_MODE = AngleMode.RADIANS
WINDOW_GEOMETRY = "400x640"
WINDOW_MIN_SIZE = (360, 600)
LOG_LEVEL = logging.WARNING
LOG_FORMAT = "%(levelname)s: %(message)s"


def main():
    level = logging.DEBUG if "--debug" in sys.argv else LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)

    calculator = Calculator(angle_mode=INITIAL_ANGLE_MODE)

    if "--cli" in sys.argv:
        from calculator_cli import main as cli_main

        cli_main(calculator)
        return

    import tkinter as tk

    from calculator_ui import CalculatorApp

    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, calculator=calculator)
    root.mainloop()


if __name__ == "__main__":
    main()
