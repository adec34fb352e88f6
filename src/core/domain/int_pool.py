"""
IntCellPool — пул ячеек хранения для ScaledInt

Free-list изменяемых ячеек IntCell, из которых ScaledInt берёт хранилище
на горячем пути десериализации.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. acquire() всегда возвращает ячейку со значением 0
2. release() обнуляет ячейку до возврата в free-list
3. После release владелец больше не обращается к ячейке
4. Free-list ограничен POOL_MAX_FREE, лишние ячейки отбрасываются
"""

import logging
import threading
from collections import deque
from typing import Deque, Final

logger = logging.getLogger(__name__)

POOL_MAX_FREE: Final[int] = 1024


class IntCell:
    """Изменяемая ячейка с целым значением"""

    __slots__ = ("value",)

    def __init__(self, value: int = 0):
        self.value = value

    def __repr__(self) -> str:
        return f"IntCell({self.value})"


class IntCellPool:
    """
    Потокобезопасный free-list ячеек IntCell.

    Аналог arena-аллокатора: ячейки переиспользуются вместо создания
    новых объектов на каждую десериализацию.
    """

    def __init__(self, max_free: int = POOL_MAX_FREE):
        if max_free < 0:
            raise ValueError(f"max_free must be non-negative, got {max_free}")
        self._max_free = max_free
        self._free: Deque[IntCell] = deque()
        self._lock = threading.Lock()

    def acquire(self) -> IntCell:
        """Ячейка из free-list (или новая), значение 0."""
        with self._lock:
            if self._free:
                return self._free.pop()
        return IntCell()

    def release(self, cell: IntCell) -> None:
        """
        Возврат ячейки в пул.

        Ячейка обнуляется; вызывающий код теряет право на неё.
        """
        cell.value = 0
        with self._lock:
            if len(self._free) < self._max_free:
                self._free.append(cell)
                return
        logger.debug("int cell pool full (max_free=%d), dropping cell", self._max_free)

    def free_count(self) -> int:
        """Количество ячеек в free-list."""
        with self._lock:
            return len(self._free)


# Глобальный пул для ScaledInt
SCALED_INT_POOL = IntCellPool()
