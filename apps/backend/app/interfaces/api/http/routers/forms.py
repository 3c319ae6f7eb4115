"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/forms.py
===============================================================================

Class/Module:
    Formularios Router (/formularios)

Responsibilities:
    - CRUD de formularios (alta, listado, detalle, patch, baja lógica y
      eliminación permanente).
    - Lectura con autenticación opcional (ciudadanos anónimos ven activos).
    - Traducir UseCaseError -> RFC7807.

Collaborators:
    - app.identity.auth (require_profile, optional_profile)
    - app.application.usecases (forms)
    - app.container (factories DI)
    - schemas.forms
===============================================================================
"""

from __future__ import annotations

from typing import Any

from app.application.usecases import (
    CreateFormInput,
    CreateFormUseCase,
    DeactivateFormUseCase,
    DeleteFormUseCase,
    FormPatch,
    GetFormUseCase,
    ListFormsUseCase,
    UpdateFormUseCase,
)
from app.container import (
    get_create_form_use_case,
    get_deactivate_form_use_case,
    get_delete_form_use_case,
    get_get_form_use_case,
    get_list_forms_use_case,
    get_update_form_use_case,
)
from app.domain.value_objects import FormFilter
from app.identity.auth import optional_profile, require_profile
from app.identity.users import AuthorizationProfile
from fastapi import APIRouter, Depends, Query

from ..error_mapping import raise_use_case_error
from ..schemas.envelope import plural_message
from ..schemas.forms import (
    CreateFormularioReq,
    FormularioEliminadoEnvelope,
    FormularioEliminadoRes,
    FormularioEnvelope,
    FormularioRes,
    FormulariosEnvelope,
    UpdateFormularioReq,
)

router = APIRouter(prefix="/formularios", tags=["formularios"])


_NULLABLE_PATCH_KEYS = {"descripcion"}


def _patch_from(req: UpdateFormularioReq) -> FormPatch:
    sent: dict[str, Any] = {
        key: value
        for key, value in req.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_PATCH_KEYS
    }
    changes: dict[str, Any] = {}
    for key, value in sent.items():
        if key == "titulo":
            changes["title"] = value
        elif key == "descripcion":
            changes["description"] = value
        elif key == "campos":
            changes["fields"] = [c.to_field_spec() for c in req.campos]
        elif key == "activo":
            changes["active"] = value
        elif key == "municipio":
            changes["municipality"] = value
    return FormPatch(**changes)


@router.post("", response_model=FormularioEnvelope, status_code=201)
async def create_form(
    req: CreateFormularioReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: CreateFormUseCase = Depends(get_create_form_use_case),
):
    input_data = CreateFormInput(
        title=req.titulo,
        fields=[c.to_field_spec() for c in req.campos],
        description=req.descripcion,
        municipality=req.municipio,
        active=req.activo,
    )
    result = await use_case.execute(input_data, profile)
    if result.error is not None:
        raise_use_case_error(result.error)

    return FormularioEnvelope(
        message="Formulario creado exitosamente",
        data=FormularioRes.from_form(result.form),
    )


@router.get("", response_model=FormulariosEnvelope)
async def list_forms(
    activo: bool | None = Query(None),
    municipio: str | None = Query(None),
    creadoPor: str | None = Query(None),
    profile: AuthorizationProfile = Depends(optional_profile),
    use_case: ListFormsUseCase = Depends(get_list_forms_use_case),
):
    filters = FormFilter(municipality=municipio, active=activo, created_by=creadoPor)
    result = await use_case.execute(profile, filters)
    if result.error is not None:
        raise_use_case_error(result.error)

    return FormulariosEnvelope(
        message=plural_message(len(result.forms), "formulario"),
        data=[FormularioRes.from_form(f) for f in result.forms],
        total=len(result.forms),
    )


@router.get("/{form_id}", response_model=FormularioEnvelope)
async def get_form(
    form_id: str,
    profile: AuthorizationProfile = Depends(optional_profile),
    use_case: GetFormUseCase = Depends(get_get_form_use_case),
):
    result = await use_case.execute(profile, form_id)
    if result.error is not None:
        raise_use_case_error(result.error, form_id)

    return FormularioEnvelope(
        message="Formulario encontrado", data=FormularioRes.from_form(result.form)
    )


@router.put("/{form_id}", response_model=FormularioEnvelope)
async def update_form(
    form_id: str,
    req: UpdateFormularioReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: UpdateFormUseCase = Depends(get_update_form_use_case),
):
    result = await use_case.execute(profile, form_id, _patch_from(req))
    if result.error is not None:
        raise_use_case_error(result.error, form_id)

    return FormularioEnvelope(
        message="Formulario actualizado exitosamente",
        data=FormularioRes.from_form(result.form),
    )


@router.delete("/{form_id}", response_model=FormularioEnvelope)
async def deactivate_form(
    form_id: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: DeactivateFormUseCase = Depends(get_deactivate_form_use_case),
):
    result = await use_case.execute(profile, form_id)
    if result.error is not None:
        raise_use_case_error(result.error, form_id)

    return FormularioEnvelope(
        message="Formulario eliminado correctamente",
        data=FormularioRes.from_form(result.form),
    )


@router.delete("/{form_id}/permanente", response_model=FormularioEliminadoEnvelope)
async def delete_form(
    form_id: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: DeleteFormUseCase = Depends(get_delete_form_use_case),
):
    result = await use_case.execute(profile, form_id)
    if result.error is not None:
        raise_use_case_error(result.error, form_id)

    return FormularioEliminadoEnvelope(
        message="Formulario eliminado permanentemente",
        data=FormularioEliminadoRes(id=form_id),
    )
