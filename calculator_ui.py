"""
Interfaz gráfica de la calculadora.

Usa tkinter. Cada pulsación llama al motor de forma síncrona desde el
hilo de la interfaz y después se refresca la pantalla con
current_display / current_expression.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculation_history import CalculationHistory
from calculator_engine import CalculationEngine
from calculator_mode import CalculatorMode, OperationType
from input_mapping import apply_action, resolve_button, resolve_key


class CalculatorApp:
    """Ventana principal de la calculadora."""

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
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "toggle_off": "#585B70",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Funciones científicas (visibles solo en modo científico) ─
    SCIENCE_BUTTONS = [
        ["\u221A", "sin", "cos", "tan"],
        ["ln", "log", "exp", "x^y"],
    ]

    # ── Teclado principal: (texto, tipo_color) ───────────────────
    KEYPAD = [
        [("C", "special"), ("CE", "special"), ("%", "func"), ("1/x", "func")],
        [("7", "num"), ("8", "num"), ("9", "num"), ("\u00F7", "op")],
        [("4", "num"), ("5", "num"), ("6", "num"), ("\u00D7", "op")],
        [("1", "num"), ("2", "num"), ("3", "num"), ("\u2212", "op")],
        [("\u00B1", "func"), ("0", "num"), (".", "num"), ("+", "op")],
        [("=", "equals")],
    ]

    MODE_TITLES = {
        CalculatorMode.STANDARD: "Calculadora - Estándar",
        CalculatorMode.SCIENTIFIC: "Calculadora - Científica",
    }

    def __init__(self, root: tk.Tk, engine=None, history=None):
        self.root = root
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculationEngine()
        self.history = history if history is not None else CalculationHistory()
        self._history_window = None

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_science_panel()
        self._create_keypad()
        self._bind_keyboard()

        self._apply_mode()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=12)
        self._f_result = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Traza de la expresión (solo lectura)
        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x", pady=(4, 0))

        row = tk.Frame(frame, bg=self.C["display_bg"])
        row.pack(fill="x", pady=(2, 4))

        self.result_var = tk.StringVar(value="0")
        self.result_entry = tk.Entry(
            row, textvariable=self.result_var, state="readonly",
            font=self._f_result, fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0, width=18,
        )

        tk.Button(
            row, text="Copiar", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        ).pack(side="right", padx=(6, 0))

        self.result_entry.pack(side="right", fill="x", expand=True)

    # ── Barra de toggles (STD/SCI · RAD/DEG · Historial) ────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.mode_btn = tk.Button(
            frame, text="STD", font=self._f_small, width=6,
            bg=self.C["toggle_off"], fg=self.C["special_fg"],
            activebackground=self.C["toggle_off"], relief="flat",
            command=self._toggle_mode,
        )
        self.mode_btn.pack(side="left", padx=(0, 4))

        self.angle_btn = tk.Button(
            frame, text="RAD", font=self._f_small, width=6,
            bg=self.C["toggle_on"], fg=self.C["bg"],
            activebackground=self.C["toggle_on"], relief="flat",
            command=self._toggle_angle,
        )
        self.angle_btn.pack(side="left", padx=(0, 4))

        tk.Button(
            frame, text="Historial", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            command=self._show_history,
        ).pack(side="right")

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self):
        self._sci_frame = tk.Frame(self.root, bg=self.C["bg"])
        for col in range(4):
            self._sci_frame.columnconfigure(col, weight=1, uniform="sci")

        for r, row_def in enumerate(self.SCIENCE_BUTTONS):
            for col, text in enumerate(row_def):
                tk.Button(
                    self._sci_frame, text=text, font=self._f_func,
                    bg=self.C["func"], fg=self.C["func_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=text: self._on_button(t),
                ).grid(row=r, column=col, sticky="nsew", padx=2, pady=2,
                       ipady=6)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        self._keypad_frame = frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=text: self._on_button(t),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        self._execute(resolve_key(event.keysym))

    # ── Acciones ─────────────────────────────────────────────────

    def _on_button(self, label: str):
        self._execute(resolve_button(label))

    def _execute(self, action):
        had_pending = self.engine.pending_operation is not None
        if not apply_action(self.engine, action):
            return

        # Se registra solo un '=' que resolvió una operación pendiente
        if (
            action == ("op", OperationType.EQUALS)
            and had_pending
            and self.engine.pending_operation is None
            and not self.engine.has_error
        ):
            self.history.add_calculation(
                self.engine.get_complete_expression(),
                self.engine.current_display,
                self.engine.mode,
            )
            self._refresh_history()
        self._refresh()

    def _refresh(self):
        self.expr_var.set(self.engine.current_expression)
        self.result_var.set(self.engine.current_display)
        color = self.C["error_fg"] if self.engine.has_error else self.C["result_fg"]
        self.result_entry.config(fg=color)
        self.result_entry.xview_moveto(1.0)

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_mode(self):
        if self.engine.mode == CalculatorMode.STANDARD:
            self.engine.mode = CalculatorMode.SCIENTIFIC
        else:
            self.engine.mode = CalculatorMode.STANDARD
        self._apply_mode()
        self._refresh()
        self._refresh_history()

    def _apply_mode(self):
        scientific = self.engine.mode == CalculatorMode.SCIENTIFIC
        self.root.title(self.MODE_TITLES[self.engine.mode])
        if scientific:
            self.mode_btn.config(text="SCI", bg=self.C["toggle_on"],
                                 fg=self.C["bg"])
            self._sci_frame.pack(fill="x", padx=6, pady=2,
                                 before=self._keypad_frame)
        else:
            self.mode_btn.config(text="STD", bg=self.C["toggle_off"],
                                 fg=self.C["special_fg"])
            self._sci_frame.pack_forget()

    def _toggle_angle(self):
        if self.engine.angle_mode == "rad":
            self.engine.angle_mode = "deg"
            self.angle_btn.config(text="DEG", bg=self.C["op"],
                                  fg=self.C["op_fg"])
        else:
            self.engine.angle_mode = "rad"
            self.angle_btn.config(text="RAD", bg=self.C["toggle_on"],
                                  fg=self.C["bg"])

    # ── Historial ────────────────────────────────────────────────

    def _show_history(self):
        if self._history_window is not None:
            self._history_window.lift()
            return

        window = tk.Toplevel(self.root, bg=self.C["bg"])
        window.title("Historial de cálculos")
        window.geometry("500x400")
        window.protocol("WM_DELETE_WINDOW", self._close_history)

        self._history_list = tk.Listbox(
            window, font=self._f_expr, bg=self.C["display_bg"],
            fg=self.C["expr_fg"], relief="flat",
        )
        self._history_list.pack(fill="both", expand=True, padx=6, pady=6)
        self._history_list.bind("<Double-Button-1>", self._recall_history)

        buttons = tk.Frame(window, bg=self.C["bg"])
        buttons.pack(fill="x", padx=6, pady=(0, 6))
        tk.Button(
            buttons, text="Borrar historial", font=self._f_small,
            bg=self.C["special"], fg=self.C["special_fg"], relief="flat",
            command=self._clear_history,
        ).pack(side="left")
        tk.Button(
            buttons, text="Cerrar", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"], relief="flat",
            command=self._close_history,
        ).pack(side="left", padx=(6, 0))

        self._history_window = window
        self._refresh_history()

    def _refresh_history(self):
        if self._history_window is None:
            return
        self._history_items = self.history.get_history(self.engine.mode)
        self._history_list.delete(0, tk.END)
        for item in self._history_items:
            self._history_list.insert(tk.END, str(item))

    def _recall_history(self, _event):
        selection = self._history_list.curselection()
        if not selection:
            return
        item = self._history_items[selection[0]]
        self.engine.set_current_value(item.result)
        self._refresh()

    def _clear_history(self):
        self.history.clear_history(self.engine.mode)
        self._refresh_history()

    def _close_history(self):
        if self._history_window is not None:
            self._history_window.destroy()
            self._history_window = None

    # ── Copiar resultado ─────────────────────────────────────────

    def _copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.result_var.get())
