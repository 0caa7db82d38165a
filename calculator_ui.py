"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. Cada botón despacha su evento del catálogo a la sesión
``Calculator`` y la pantalla se redibuja a partir del snapshot. Todo
ocurre en el hilo de la interfaz: un evento termina antes del siguiente.
"""

import tkinter as tk
from tkinter import font as tkfont

from button_catalog import (
    MEMORY_BUTTONS,
    MODE_TOGGLE,
    PRIMARY_BUTTONS,
    SCIENTIFIC_BUTTONS,
    find_button,
)
from calculator_state import Calculator


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    PRIMARY_COLUMNS = 4
    SCIENCE_COLUMNS = 5

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "memory":     "#313244",
        "memory_fg":  "#BAC2DE",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle":     "#A6E3A1",
        "toggle_fg":  "#1E1E2E",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # Teclas físicas → texto del botón
    KEY_LABELS = {
        "Return": "=",
        "KP_Enter": "=",
        "Escape": "AC",
        "BackSpace": "⌫",
    }

    def __init__(self, root: tk.Tk, calculator=None):
        self.root = root
        self.root.title("Calculadora Científica")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.calculator = calculator if calculator is not None else Calculator()

        self._init_fonts()
        self._create_display()
        self._create_memory_bar()
        self._create_grid(SCIENTIFIC_BUTTONS, self.SCIENCE_COLUMNS, self._f_func)
        self._create_grid(PRIMARY_BUTTONS, self.PRIMARY_COLUMNS, self._f_btn,
                          expand=True)
        self._bind_keyboard()
        self._render()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=12)
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=10)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Fila de indicadores: memoria y modo angular
        row = tk.Frame(frame, bg=self.C["display_bg"])
        row.pack(fill="x")

        self.memory_label = tk.Label(
            row, text="", font=self._f_small, width=3,
            bg=self.C["display_bg"], fg=self.C["toggle"],
        )
        self.memory_label.pack(side="left")

        self.angle_btn = tk.Button(
            row, text="", font=self._f_small, width=6,
            bg=self.C["toggle"], fg=self.C["toggle_fg"],
            activebackground=self.C["toggle"], relief="flat",
            command=lambda: self._press(MODE_TOGGLE.label),
        )
        self.angle_btn.pack(side="left", padx=(4, 0))

        self.history_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.history_var, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x", pady=(6, 0))

        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x")

        self.result_var = tk.StringVar(value="0")
        self.result_label = tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        )
        self.result_label.pack(fill="x", pady=(2, 4))

    # ── Fila de memoria ──────────────────────────────────────────

    def _create_memory_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))
        for col, button in enumerate(MEMORY_BUTTONS):
            frame.columnconfigure(col, weight=1, uniform="mem")
            self._make_button(frame, button, self._f_small).grid(
                row=0, column=col, sticky="nsew", padx=2, pady=2, ipady=2)

    # ── Rejillas de botones ──────────────────────────────────────

    def _create_grid(self, buttons, columns: int, font, expand: bool = False):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        if expand:
            frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        else:
            frame.pack(fill="x", padx=6, pady=2)

        for c in range(columns):
            frame.columnconfigure(c, weight=1, uniform=f"grid{columns}")

        rows = [buttons[i:i + columns] for i in range(0, len(buttons), columns)]
        for r, row_def in enumerate(rows):
            # Repartir columnas con colspan para filas cortas
            spans = self._compute_spans(len(row_def), columns)
            col_pos = 0
            for idx, button in enumerate(row_def):
                self._make_button(frame, button, font).grid(
                    row=r, column=col_pos, columnspan=spans[idx],
                    sticky="nsew", padx=2, pady=2, ipady=6)
                col_pos += spans[idx]
            if expand:
                frame.rowconfigure(r, weight=1)

    def _make_button(self, parent, button, font) -> tk.Button:
        return tk.Button(
            parent, text=button.label, font=font,
            bg=self.C[button.kind], fg=self.C[f"{button.kind}_fg"],
            activebackground=self.C["special"], relief="flat",
            command=lambda label=button.label: self._press(label),
        )

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        label = self.KEY_LABELS.get(event.keysym, event.char)
        if not label:
            return
        try:
            find_button(label)
        except KeyError:
            return
        self._press(label)

    # ── Acciones ─────────────────────────────────────────────────

    def _press(self, label: str):
        self.calculator.press(label)
        self._render()

    def _render(self):
        snap = self.calculator.snapshot()

        self.history_var.set(f"{snap.last_expression} =" if snap.last_expression else "")
        self.expr_var.set(snap.expression if snap.show_expression else "")
        self.result_var.set(snap.primary_text)
        self.result_label.config(
            fg=self.C["error_fg"] if snap.error else self.C["result_fg"])

        self.memory_label.config(text="M" if snap.memory_indicator else "")
        self.angle_btn.config(text=snap.angle_label)
