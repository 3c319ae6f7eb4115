"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/submissions.py
===============================================================================

Class/Module:
    Trámites Router (/tramites)

Responsibilities:
    - Alta de trámites por usuarios autenticados.
    - Listado / detalle con scope (municipio para admin, propios para usuario).
    - Triage (estado, comentarios), eliminación y estadísticas.
    - Traducir UseCaseError -> RFC7807.

Collaborators:
    - app.identity.auth.require_profile
    - app.application.usecases (submissions)
    - app.container (factories DI)
    - schemas.submissions

Notas:
    - /estadisticas se declara antes de /{submission_id}.
===============================================================================
"""

from __future__ import annotations

from app.application.usecases import (
    UNSET,
    CreateSubmissionInput,
    CreateSubmissionUseCase,
    DeleteSubmissionUseCase,
    GetSubmissionUseCase,
    ListSubmissionsUseCase,
    SubmissionPatch,
    SubmissionStatisticsUseCase,
    UpdateSubmissionUseCase,
)
from app.container import (
    get_create_submission_use_case,
    get_delete_submission_use_case,
    get_get_submission_use_case,
    get_list_submissions_use_case,
    get_submission_statistics_use_case,
    get_update_submission_use_case,
)
from app.domain.entities import SubmissionStatus
from app.domain.value_objects import SubmissionFilter
from app.identity.auth import require_profile
from app.identity.users import AuthorizationProfile
from fastapi import APIRouter, Depends, Query

from ..error_mapping import raise_use_case_error
from ..schemas.envelope import plural_message
from ..schemas.submissions import (
    CreateTramiteReq,
    EstadisticasEnvelope,
    EstadisticasRes,
    TramiteEliminadoEnvelope,
    TramiteEliminadoRes,
    TramiteEnvelope,
    TramiteRes,
    TramitesEnvelope,
    UpdateTramiteReq,
)

router = APIRouter(prefix="/tramites", tags=["tramites"])


def _patch_from(req: UpdateTramiteReq) -> SubmissionPatch:
    sent = req.model_fields_set
    return SubmissionPatch(
        status=req.estado if "estado" in sent and req.estado is not None else UNSET,
        comments=req.comentarios if "comentarios" in sent else UNSET,
        answers=req.respuestas if "respuestas" in sent and req.respuestas is not None else UNSET,
    )


@router.post("", response_model=TramiteEnvelope, status_code=201)
async def create_submission(
    req: CreateTramiteReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: CreateSubmissionUseCase = Depends(get_create_submission_use_case),
):
    input_data = CreateSubmissionInput(
        form_id=req.formularioId,
        answers=req.respuestas,
        submitter_name=req.usuarioNombre,
    )
    result = await use_case.execute(input_data, profile)
    if result.error is not None:
        raise_use_case_error(result.error, req.formularioId)

    return TramiteEnvelope(
        message="Trámite creado exitosamente",
        data=TramiteRes.from_submission(result.submission),
    )


@router.get("", response_model=TramitesEnvelope)
async def list_submissions(
    formularioId: str | None = Query(None),
    estado: SubmissionStatus | None = Query(None),
    municipio: str | None = Query(None),
    usuarioId: str | None = Query(None),
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: ListSubmissionsUseCase = Depends(get_list_submissions_use_case),
):
    filters = SubmissionFilter(
        municipality=municipio,
        submitter_id=usuarioId,
        form_id=formularioId,
        status=estado,
    )
    result = await use_case.execute(profile, filters)
    if result.error is not None:
        raise_use_case_error(result.error)

    return TramitesEnvelope(
        message=plural_message(len(result.submissions), "trámite"),
        data=[TramiteRes.from_submission(s) for s in result.submissions],
        total=len(result.submissions),
    )


@router.get("/estadisticas", response_model=EstadisticasEnvelope)
async def submission_statistics(
    municipio: str | None = Query(None),
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: SubmissionStatisticsUseCase = Depends(get_submission_statistics_use_case),
):
    result = await use_case.execute(profile, municipio)
    if result.error is not None:
        raise_use_case_error(result.error)

    return EstadisticasEnvelope(
        message="Estadísticas obtenidas correctamente",
        data=EstadisticasRes.from_statistics(result.statistics),
    )


@router.get("/{submission_id}", response_model=TramiteEnvelope)
async def get_submission(
    submission_id: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: GetSubmissionUseCase = Depends(get_get_submission_use_case),
):
    result = await use_case.execute(profile, submission_id)
    if result.error is not None:
        raise_use_case_error(result.error, submission_id)

    return TramiteEnvelope(
        message="Trámite encontrado",
        data=TramiteRes.from_submission(result.submission),
    )


@router.put("/{submission_id}", response_model=TramiteEnvelope)
async def update_submission(
    submission_id: str,
    req: UpdateTramiteReq,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: UpdateSubmissionUseCase = Depends(get_update_submission_use_case),
):
    result = await use_case.execute(profile, submission_id, _patch_from(req))
    if result.error is not None:
        raise_use_case_error(result.error, submission_id)

    return TramiteEnvelope(
        message="Trámite actualizado exitosamente",
        data=TramiteRes.from_submission(result.submission),
    )


@router.delete("/{submission_id}", response_model=TramiteEliminadoEnvelope)
async def delete_submission(
    submission_id: str,
    profile: AuthorizationProfile = Depends(require_profile),
    use_case: DeleteSubmissionUseCase = Depends(get_delete_submission_use_case),
):
    result = await use_case.execute(profile, submission_id)
    if result.error is not None:
        raise_use_case_error(result.error, submission_id)

    return TramiteEliminadoEnvelope(
        message="Trámite eliminado permanentemente",
        data=TramiteEliminadoRes(id=submission_id),
    )
