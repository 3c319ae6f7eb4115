"""
===============================================================================
USE CASE ERRORS (Shared Error Model)
===============================================================================

Name:
    Use Case Errors

Business Goal:
    Un único contrato de error para Users / Forms / Submissions, mapeable a
    HTTP sin que los casos de uso conozcan FastAPI.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    errors (module)

Responsibilities:
    - Definir ErrorCode (categorías estables).
    - Representar UseCaseError (code + message + resource).
    - Proveer factories con mensajes consistentes.

Collaborators:
    - interfaces/api/http/error_mapping.py (code -> status HTTP)

Notas:
    - Fallas de colaboradores (store / identity provider) NO son
      UseCaseError: se propagan como StoreError / IdentityProviderError.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input inválido (ej: rol/municipio inconsistentes).
      - FORBIDDEN: la policy denegó la operación.
      - NOT_FOUND: recurso inexistente.
      - CONFLICT: unicidad (ej: email ya registrado).
      - UNAVAILABLE: formulario inactivo al crear un trámite.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(frozen=True)
class UseCaseError:
    code: ErrorCode
    message: str
    resource: str | None = None


# Nombres de recurso (para mensajes y para el mapeo HTTP)
RESOURCE_USER = "Usuario"
RESOURCE_FORM = "Formulario"
RESOURCE_SUBMISSION = "Trámite"

_NOT_FOUND_MESSAGES = {
    RESOURCE_USER: "Usuario no encontrado",
    RESOURCE_FORM: "Formulario no encontrado",
    RESOURCE_SUBMISSION: "Trámite no encontrado",
}


def validation_error(message: str, resource: str | None = None) -> UseCaseError:
    return UseCaseError(ErrorCode.VALIDATION_ERROR, message, resource)


def forbidden(
    resource: str, message: str = "No tiene permisos para esta operación"
) -> UseCaseError:
    return UseCaseError(ErrorCode.FORBIDDEN, message, resource)


def not_found(resource: str) -> UseCaseError:
    return UseCaseError(
        ErrorCode.NOT_FOUND,
        _NOT_FOUND_MESSAGES.get(resource, f"{resource} no encontrado"),
        resource,
    )


def conflict(message: str, resource: str | None = None) -> UseCaseError:
    return UseCaseError(ErrorCode.CONFLICT, message, resource)


def unavailable(message: str, resource: str | None = None) -> UseCaseError:
    return UseCaseError(ErrorCode.UNAVAILABLE, message, resource)
