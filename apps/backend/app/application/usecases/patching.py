"""
Sentinel para patches parciales.

UNSET = "campo no enviado" (distinto de None = "borrar el valor").
"""

from __future__ import annotations

from typing import Any


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def all_unset(*values: Any) -> bool:
    return all(value is UNSET for value in values)
