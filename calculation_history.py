"""Historial de cálculos en memoria, separado por modo."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime

from calculator_mode import CalculatorMode

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 100


@dataclass(eq=False)
class HistoryItem:
    """Un cálculo terminado."""

    expression: str
    result: str
    mode: CalculatorMode
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self):
        # get_complete_expression() ya suele terminar en "= resultado"
        if self.expression.endswith(f"= {self.result}"):
            return self.expression
        return f"{self.expression} = {self.result}"


class CalculationHistory:
    """Registro de capacidad fija por modo; se descarta primero lo más antiguo."""

    def __init__(self, max_items: int = MAX_HISTORY_ITEMS):
        if max_items <= 0:
            raise ValueError("max_items debe ser positivo")
        self._max_items = max_items
        self._histories = {
            mode: deque(maxlen=max_items) for mode in CalculatorMode
        }

    @property
    def max_items(self) -> int:
        return self._max_items

    def add_calculation(self, expression: str, result: str, mode: CalculatorMode) -> HistoryItem:
        mode = CalculatorMode(mode)
        item = HistoryItem(expression, result, mode)
        target = self._histories[mode]
        if len(target) == self._max_items:
            logger.debug("Historial %s lleno, se descarta %s", mode.value, target[0])
        target.append(item)
        return item

    def get_history(self, mode: CalculatorMode) -> list[HistoryItem]:
        return list(self._histories[CalculatorMode(mode)])

    def get_all_history(self) -> list[HistoryItem]:
        items = [item for history in self._histories.values() for item in history]
        return sorted(items, key=lambda item: item.timestamp)

    def clear_history(self, mode: CalculatorMode):
        self._histories[CalculatorMode(mode)].clear()

    def clear_all_history(self):
        for history in self._histories.values():
            history.clear()

    def remove_history_item(self, item: HistoryItem) -> bool:
        for history in self._histories.values():
            if item in history:
                history.remove(item)
                return True
        return False

    def get_history_count(self, mode: CalculatorMode) -> int:
        return len(self._histories[CalculatorMode(mode)])

    def get_most_recent(self, mode: CalculatorMode) -> HistoryItem | None:
        history = self._histories[CalculatorMode(mode)]
        return history[-1] if history else None

    def export_history(self, mode: CalculatorMode) -> str:
        """Texto con cabecera y una línea con fecha por cálculo."""
        mode = CalculatorMode(mode)
        lines = [f"Calculator History - {mode.value} Mode", "=" * 40]
        for item in self._histories[mode]:
            lines.append(f"{item.timestamp:%Y-%m-%d %H:%M:%S} - {item}")
        return "\n".join(lines) + "\n"
