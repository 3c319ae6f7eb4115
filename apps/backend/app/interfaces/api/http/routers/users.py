"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Auth & Users Router (/auth)

Responsibilities:
    - Login (credential exchange + último acceso) y perfil propio.
    - Gestión de usuarios (registro, listado, patch, desactivación).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir UseCaseError -> RFC7807.

Collaborators:
    - app.identity.auth (require_profile, require_login_user)
    - app.application.usecases (users)
    - app.container (factories DI)
    - schemas.users (DTOs Pydantic)

Notas:
    - El router NO compara roles: la policy decide dentro de cada caso de uso.
===============================================================================
"""

from __future__ import annotations

from typing import Any

from app.application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    DeactivateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
    UserPatch,
)
from app.container import (
    get_create_user_use_case,
    get_deactivate_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
)
from app.domain.value_objects import UserFilter
from app.identity.auth import require_login_user, require_profile
from app.identity.users import AuthorizationProfile, User, UserRole
from fastapi import APIRouter, Depends, Query

from ..error_mapping import raise_use_case_error
from ..schemas.envelope import plural_message
from ..schemas.users import (
    RegistroReq,
    UpdateUsuarioReq,
    UsuarioDesactivadoEnvelope,
    UsuarioDesactivadoRes,
    UsuarioEnvelope,
    UsuarioRes,
    UsuariosEnvelope,
)

router = APIRouter(prefix="/auth", tags=["auth"])

# Claves que admiten null explícito en el patch (null => limpiar).
_NULLABLE_PATCH_KEYS = {"municipio"}


def _patch_from(req: UpdateUsuarioReq) -> UserPatch:
    sent: dict[str, Any] = {
        key: value
        for key, value in req.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_PATCH_KEYS
    }
    mapping = {
        "nombre": "display_name",
        "rol": "role",
        "municipio": "municipality",
        "activo": "active",
    }
    return UserPatch(**{mapping[key]: value for key, value in sent.items()})


# =============================================================================
# Sesión
# =============================================================================


@router.post("/login", response_model=UsuarioEnvelope)
async def login(user: User = Depends(require_login_user)):
    return UsuarioEnvelope(message="Login exitoso", data=UsuarioRes.from_user(user))


@router.get("/perfil", response_model=UsuarioEnvelope)
async def get_profile(
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = await use_case.execute(profile, profile.subject_id or "")
    if result.error is not None:
        raise_use_case_error(result.error, profile.subject_id)

    return UsuarioEnvelope(
        message="Perfil obtenido correctamente",
        data=UsuarioRes.from_user(result.user),
    )


# =============================================================================
# Gestión de usuarios
# =============================================================================


@router.post("/registro", response_model=UsuarioEnvelope, status_code=201)
async def register_user(
    req: RegistroReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    input_data = CreateUserInput(
        email=str(req.email),
        password=req.password,
        display_name=req.nombre,
        role=req.rol,
        municipality=req.municipio,
    )
    result = await use_case.execute(input_data, profile)
    if result.error is not None:
        raise_use_case_error(result.error)

    return UsuarioEnvelope(
        message="Usuario registrado exitosamente",
        data=UsuarioRes.from_user(result.user),
    )


@router.get("/usuarios", response_model=UsuariosEnvelope)
async def list_users(
    rol: UserRole | None = Query(None),
    municipio: str | None = Query(None),
    activo: bool | None = Query(None),
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    filters = UserFilter(role=rol, municipality=municipio, active=activo)
    result = await use_case.execute(profile, filters)
    if result.error is not None:
        raise_use_case_error(result.error)

    return UsuariosEnvelope(
        message=plural_message(len(result.users), "usuario"),
        data=[UsuarioRes.from_user(u) for u in result.users],
        total=len(result.users),
    )


@router.get("/usuarios/{uid}", response_model=UsuarioEnvelope)
async def get_user(
    uid: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = await use_case.execute(profile, uid)
    if result.error is not None:
        raise_use_case_error(result.error, uid)

    return UsuarioEnvelope(
        message="Usuario encontrado", data=UsuarioRes.from_user(result.user)
    )


@router.put("/usuarios/{uid}", response_model=UsuarioEnvelope)
async def update_user(
    uid: str,
    req: UpdateUsuarioReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = await use_case.execute(profile, uid, _patch_from(req))
    if result.error is not None:
        raise_use_case_error(result.error, uid)

    return UsuarioEnvelope(
        message="Usuario actualizado exitosamente",
        data=UsuarioRes.from_user(result.user),
    )


@router.delete("/usuarios/{uid}", response_model=UsuarioDesactivadoEnvelope)
async def deactivate_user(
    uid: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: DeactivateUserUseCase = Depends(get_deactivate_user_use_case),
):
    result = await use_case.execute(profile, uid)
    if result.error is not None:
        raise_use_case_error(result.error, uid)

    return UsuarioDesactivadoEnvelope(
        message="Usuario desactivado correctamente",
        data=UsuarioDesactivadoRes(uid=uid),
    )
