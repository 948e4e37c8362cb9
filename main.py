"""Punto de entrada de la calculadora.

``python main.py`` abre la interfaz gráfica; ``python main.py --demo``
ejecuta la demostración por consola.
"""

import logging
import os
import sys

from calculator_mode import CalculatorMode


INITIAL_MODE = CalculatorMode.STANDARD
LOG_LEVEL = os.environ.get("CALCULATOR_LOG_LEVEL", "WARNING")


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    if "--demo" in argv:
        from console_demo import run_demo

        run_demo()
        return

    import tkinter as tk

    from calculator_engine import CalculationEngine
    from calculator_ui import CalculatorApp

    root = tk.Tk()
    root.minsize(320, 480)
    CalculatorApp(root, engine=CalculationEngine(mode=INITIAL_MODE))
    root.mainloop()


if __name__ == "__main__":
    main()
