"""
===============================================================================
TARJETA CRC — schemas/__init__.py
===============================================================================

Módulo:
    Paquete de Schemas HTTP (DTOs Pydantic)

Responsabilidades:
    - Agrupar contratos HTTP por recurso (usuarios / formularios / trámites).
    - Mantener separados DTOs (schemas) de controladores (routers).

Reglas:
    - Schemas NO importan infraestructura ni ejecutan casos de uso.
    - Las claves JSON son las del contrato público (en español).
===============================================================================
"""

__all__ = []
