"""
===============================================================================
TARJETA CRC — schemas/envelope.py
===============================================================================

Módulo:
    Envoltorio común de respuestas exitosas

Responsabilidades:
    - Definir el contrato `{success, message, data, total?}` que consumen los
      clientes existentes (panel web / app).

Notas:
    - Los errores NO usan este envoltorio: viajan como RFC7807
      (crosscutting.error_responses).
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    success: bool = True
    message: str = Field(..., description="Mensaje legible para el cliente")


class ListMeta(ApiResponse):
    total: int = Field(..., ge=0, description="Cantidad de elementos en data")


def plural_message(count: int, noun: str) -> str:
    """'Se encontraron 3 formulario(s)'."""
    return f"Se encontraron {count} {noun}(s)"
