"""
Precision Errors — типизированные ошибки конверсий

Ошибки поднимаются только на двух границах:
- граница machine double (int ↔ float)
- граница текста (str → int)

Внутренние помощники (bridge, scale cache) не падают на корректном входе.
Повторов нет: все операции — чистые вычисления без транзиентных сбоев.
"""

from enum import Enum


class PrecisionErrorKind(str, Enum):
    """Вид ошибки конверсии"""

    NULL_INPUT = "null_input"
    NEGATIVE_INPUT = "negative_input"
    PRECISION_LOSS = "precision_loss"
    INVALID_TEXT = "invalid_text"


class PrecisionError(ValueError):
    """
    Базовая ошибка конверсии.

    Наследуется от ValueError, чтобы pydantic-валидаторы превращали её
    в ValidationError без дополнительной обёртки.
    """

    kind: PrecisionErrorKind


class NullInputError(PrecisionError):
    """Аргумент scaled integer отсутствует (None)"""

    kind = PrecisionErrorKind.NULL_INPUT


class NegativeInputError(PrecisionError):
    """Отрицательная величина не может представлять баланс"""

    kind = PrecisionErrorKind.NEGATIVE_INPUT


class PrecisionLossError(PrecisionError):
    """
    Потеря точности при сужении до float.

    Также поднимается для NaN/Inf на входе display → scaled.
    """

    kind = PrecisionErrorKind.PRECISION_LOSS


class ValueTooLargeError(PrecisionLossError):
    """Значение превышает жёсткий входной лимит SAFE-режима"""


class InvalidTextError(PrecisionError):
    """Строка не разобрана ни как base-10, ни как 0x base-16"""

    kind = PrecisionErrorKind.INVALID_TEXT
