"""
Name: Submission Use Case Tests

Responsibilities:
  - Creation against active forms only, with a frozen snapshot
  - Submitter forced to the caller
  - Scoped listing / reads (admin by municipality, citizen by ownership)
  - Staff-only triage, configurable hard delete, statistics
"""

import pytest

from app.application.usecases import (
    CreateSubmissionInput,
    CreateSubmissionUseCase,
    DeactivateFormUseCase,
    DeleteSubmissionUseCase,
    ErrorCode,
    FormPatch,
    GetSubmissionUseCase,
    ListSubmissionsUseCase,
    SubmissionPatch,
    SubmissionStatisticsUseCase,
    UpdateFormUseCase,
    UpdateSubmissionUseCase,
)
from app.domain.access_policy import SubmissionDeletePolicy
from app.domain.entities import SubmissionStatus
from app.domain.value_objects import SubmissionFilter
from app.identity.users import ANONYMOUS, UserRole

from conftest import (
    MUNICIPALITY_A,
    MUNICIPALITY_B,
    make_form,
    make_profile,
    make_submission,
    minutes_ago,
)

pytestmark = pytest.mark.unit

ANSWERS = {"direccion": "Av. Siempreviva 742"}


class DeactivatedAfterReadFormRepository:
    """Returns the form as loaded, then deactivates the stored record."""

    def __init__(self, inner):
        self._inner = inner

    async def get_form(self, form_id):
        form = await self._inner.get_form(form_id)
        await self._inner.update_form(form_id, {"active": False})
        return form

    def __getattr__(self, name):
        return getattr(self._inner, name)


@pytest.fixture
def create_use_case(submission_repo, form_repo) -> CreateSubmissionUseCase:
    return CreateSubmissionUseCase(submission_repo, form_repo)


# =============================================================================
# CreateSubmission
# =============================================================================


@pytest.mark.asyncio
async def test_create_submission_snapshots_form_and_forces_submitter(
    create_use_case, form_repo, submission_repo, citizen
):
    form = await form_repo.create_form(make_form())

    result = await create_use_case.execute(
        CreateSubmissionInput(form_id=form.id, answers=ANSWERS), citizen
    )
    stored = await submission_repo.get_submission(result.submission.id)

    assert result.error is None
    assert stored.submitter_id == "vecino-1"
    assert stored.submitter_name == "Ana Vecina"
    assert stored.form_title == form.title
    assert stored.municipality == MUNICIPALITY_A
    assert stored.status == SubmissionStatus.PENDING
    assert stored.comments == ""
    assert stored.answers == ANSWERS


@pytest.mark.asyncio
async def test_create_submission_uses_explicit_submitter_name(create_use_case, form_repo, citizen):
    form = await form_repo.create_form(make_form())

    result = await create_use_case.execute(
        CreateSubmissionInput(form_id=form.id, submitter_name="  Ana María "), citizen
    )

    assert result.submission.submitter_name == "Ana María"


@pytest.mark.asyncio
async def test_create_submission_on_inactive_form_is_unavailable(
    create_use_case, form_repo, submission_repo, citizen
):
    form = await form_repo.create_form(make_form(active=False))

    result = await create_use_case.execute(
        CreateSubmissionInput(form_id=form.id, answers=ANSWERS), citizen
    )

    assert result.error.code == ErrorCode.UNAVAILABLE
    assert await submission_repo.list_submissions(SubmissionFilter()) == []


@pytest.mark.asyncio
async def test_create_submission_missing_form_is_not_found(create_use_case, citizen):
    result = await create_use_case.execute(CreateSubmissionInput(form_id="no-existe"), citizen)

    assert result.error.code == ErrorCode.NOT_FOUND
    assert result.error.message == "Formulario no encontrado"


@pytest.mark.asyncio
async def test_anonymous_cannot_create_submission(create_use_case, form_repo):
    form = await form_repo.create_form(make_form())

    result = await create_use_case.execute(CreateSubmissionInput(form_id=form.id), ANONYMOUS)

    assert result.error.code == ErrorCode.FORBIDDEN


@pytest.mark.asyncio
async def test_create_succeeds_when_form_deactivated_after_read(
    form_repo, submission_repo, citizen
):
    form = await form_repo.create_form(make_form())
    use_case = CreateSubmissionUseCase(
        submission_repo, DeactivatedAfterReadFormRepository(form_repo)
    )

    result = await use_case.execute(CreateSubmissionInput(form_id=form.id), citizen)

    assert result.error is None
    assert (await form_repo.get_form(form.id)).active is False
    assert (await submission_repo.get_submission(result.submission.id)).form_id == form.id


@pytest.mark.asyncio
async def test_snapshot_survives_form_edit_and_deactivation(
    create_use_case, form_repo, submission_repo, citizen, admin_a
):
    form = await form_repo.create_form(make_form(title="Poda"))
    created = await create_use_case.execute(CreateSubmissionInput(form_id=form.id), citizen)

    await UpdateFormUseCase(form_repo).execute(admin_a, form.id, FormPatch(title="Poda 2030"))
    await DeactivateFormUseCase(form_repo).execute(admin_a, form.id)
    stored = await submission_repo.get_submission(created.submission.id)

    assert stored.form_title == "Poda"
    assert stored.municipality == MUNICIPALITY_A


# =============================================================================
# ListSubmissions / GetSubmission
# =============================================================================


@pytest.mark.asyncio
async def test_list_submissions_scopes(form_repo, submission_repo, admin_a, citizen, superadmin):
    form_a = await form_repo.create_form(make_form())
    form_b = await form_repo.create_form(make_form(municipality=MUNICIPALITY_B))
    mine = await submission_repo.create_submission(
        make_submission(form_a, created_at=minutes_ago(10))
    )
    other = await submission_repo.create_submission(
        make_submission(form_a, submitter_id="vecino-2", created_at=minutes_ago(1))
    )
    elsewhere = await submission_repo.create_submission(make_submission(form_b))
    use_case = ListSubmissionsUseCase(submission_repo)

    by_admin = await use_case.execute(admin_a, SubmissionFilter(municipality=MUNICIPALITY_B))
    by_citizen = await use_case.execute(citizen, SubmissionFilter(submitter_id="vecino-2"))
    by_root = await use_case.execute(superadmin)

    assert [s.id for s in by_admin.submissions] == [other.id, mine.id]
    assert [s.id for s in by_citizen.submissions] == [mine.id]
    assert {s.id for s in by_root.submissions} == {mine.id, other.id, elsewhere.id}


@pytest.mark.asyncio
async def test_anonymous_cannot_list_submissions(submission_repo):
    result = await ListSubmissionsUseCase(submission_repo).execute(ANONYMOUS)
    assert result.error.code == ErrorCode.FORBIDDEN


@pytest.mark.asyncio
async def test_get_submission_ownership(form_repo, submission_repo, citizen, other_citizen, admin_b):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))
    use_case = GetSubmissionUseCase(submission_repo)

    own = await use_case.execute(citizen, submission.id)
    foreign = await use_case.execute(other_citizen, submission.id)
    other_municipality = await use_case.execute(admin_b, submission.id)
    missing = await use_case.execute(citizen, "no-existe")

    assert own.submission.id == submission.id
    assert foreign.error.code == ErrorCode.FORBIDDEN
    assert other_municipality.error.code == ErrorCode.FORBIDDEN
    assert missing.error.message == "Trámite no encontrado"


# =============================================================================
# UpdateSubmission
# =============================================================================


@pytest.mark.asyncio
async def test_admin_updates_status_without_touching_snapshot(form_repo, submission_repo, admin_a):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))

    result = await UpdateSubmissionUseCase(submission_repo).execute(
        admin_a,
        submission.id,
        SubmissionPatch(status=SubmissionStatus.APPROVED, comments="Aprobado"),
    )
    stored = await submission_repo.get_submission(submission.id)

    assert result.error is None
    assert stored.status == SubmissionStatus.APPROVED
    assert stored.comments == "Aprobado"
    assert stored.form_title == submission.form_title
    assert stored.submitter_id == submission.submitter_id
    assert stored.created_at == submission.created_at


@pytest.mark.asyncio
async def test_citizen_cannot_update_own_submission(form_repo, submission_repo, citizen):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))

    result = await UpdateSubmissionUseCase(submission_repo).execute(
        citizen, submission.id, SubmissionPatch(status=SubmissionStatus.APPROVED)
    )

    assert result.error.code == ErrorCode.FORBIDDEN
    assert (await submission_repo.get_submission(submission.id)).status == SubmissionStatus.PENDING


@pytest.mark.asyncio
async def test_update_submission_other_municipality_and_empty_patch(
    form_repo, submission_repo, admin_b
):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))
    use_case = UpdateSubmissionUseCase(submission_repo)

    foreign = await use_case.execute(admin_b, submission.id, SubmissionPatch(comments="x"))
    empty = await use_case.execute(admin_b, submission.id, SubmissionPatch())

    assert foreign.error.code == ErrorCode.FORBIDDEN
    assert empty.error.code == ErrorCode.VALIDATION_ERROR


# =============================================================================
# DeleteSubmission
# =============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "policy, owner_allowed, admin_allowed",
    [
        (SubmissionDeletePolicy.ANY, True, True),
        (SubmissionDeletePolicy.STAFF, False, True),
        (SubmissionDeletePolicy.SUPERADMIN, False, False),
    ],
)
async def test_delete_submission_policy_modes(
    form_repo, submission_repo, citizen, admin_a, policy, owner_allowed, admin_allowed
):
    form = await form_repo.create_form(make_form())
    by_owner = await submission_repo.create_submission(make_submission(form))
    by_admin = await submission_repo.create_submission(make_submission(form))
    use_case = DeleteSubmissionUseCase(submission_repo, policy)

    owner_result = await use_case.execute(citizen, by_owner.id)
    admin_result = await use_case.execute(admin_a, by_admin.id)

    assert owner_result.deleted is owner_allowed
    assert admin_result.deleted is admin_allowed
    assert (await submission_repo.get_submission(by_owner.id) is None) is owner_allowed


@pytest.mark.asyncio
async def test_delete_submission_of_other_user_is_forbidden(
    form_repo, submission_repo, other_citizen, superadmin
):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))
    use_case = DeleteSubmissionUseCase(submission_repo, SubmissionDeletePolicy.SUPERADMIN)

    denied = await DeleteSubmissionUseCase(submission_repo).execute(other_citizen, submission.id)
    deleted = await use_case.execute(superadmin, submission.id)
    again = await use_case.execute(superadmin, submission.id)

    assert denied.error.code == ErrorCode.FORBIDDEN
    assert deleted.submission_id == submission.id
    assert again.error.code == ErrorCode.NOT_FOUND


# =============================================================================
# Statistics
# =============================================================================


async def _seed_statuses(form_repo, submission_repo):
    form_a = await form_repo.create_form(make_form())
    form_b = await form_repo.create_form(make_form(municipality=MUNICIPALITY_B))
    for status in (
        SubmissionStatus.PENDING,
        SubmissionStatus.PENDING,
        SubmissionStatus.IN_REVIEW,
        SubmissionStatus.APPROVED,
    ):
        await submission_repo.create_submission(make_submission(form_a, status=status))
    await submission_repo.create_submission(
        make_submission(form_b, status=SubmissionStatus.REJECTED)
    )


@pytest.mark.asyncio
async def test_statistics_admin_forced_to_own_municipality(form_repo, submission_repo, admin_a):
    await _seed_statuses(form_repo, submission_repo)

    result = await SubmissionStatisticsUseCase(submission_repo).execute(
        admin_a, municipality=MUNICIPALITY_B
    )
    stats = result.statistics

    assert stats.municipality == MUNICIPALITY_A
    assert (stats.total, stats.pending, stats.in_review, stats.approved, stats.rejected) == (
        4,
        2,
        1,
        1,
        0,
    )


@pytest.mark.asyncio
async def test_statistics_superadmin_all_municipalities(form_repo, submission_repo, superadmin):
    await _seed_statuses(form_repo, submission_repo)
    use_case = SubmissionStatisticsUseCase(submission_repo)

    everything = await use_case.execute(superadmin)
    only_b = await use_case.execute(superadmin, municipality=MUNICIPALITY_B)

    assert everything.statistics.municipality is None
    assert everything.statistics.total == 5
    assert only_b.statistics.total == 1
    assert only_b.statistics.rejected == 1


@pytest.mark.asyncio
async def test_statistics_forbidden_for_citizen(submission_repo, citizen):
    result = await SubmissionStatisticsUseCase(submission_repo).execute(citizen)
    assert result.error.code == ErrorCode.FORBIDDEN


# =============================================================================
# Admin sin municipio
# =============================================================================


@pytest.fixture
def unscoped_admin():
    return make_profile(UserRole.ADMIN, subject_id="admin-x", municipality=None)


@pytest.mark.asyncio
async def test_admin_without_municipality_cannot_list_submissions(
    form_repo, submission_repo, unscoped_admin
):
    await _seed_statuses(form_repo, submission_repo)

    result = await ListSubmissionsUseCase(submission_repo).execute(unscoped_admin)

    assert result.error.code == ErrorCode.FORBIDDEN
    assert not result.submissions


@pytest.mark.asyncio
async def test_admin_without_municipality_cannot_read_statistics(
    form_repo, submission_repo, unscoped_admin
):
    await _seed_statuses(form_repo, submission_repo)

    result = await SubmissionStatisticsUseCase(submission_repo).execute(
        unscoped_admin, municipality=MUNICIPALITY_B
    )

    assert result.error.code == ErrorCode.FORBIDDEN
    assert result.statistics is None


@pytest.mark.asyncio
async def test_admin_without_municipality_cannot_read_or_update_submission(
    form_repo, submission_repo, unscoped_admin
):
    form = await form_repo.create_form(make_form())
    submission = await submission_repo.create_submission(make_submission(form))

    read = await GetSubmissionUseCase(submission_repo).execute(unscoped_admin, submission.id)
    updated = await UpdateSubmissionUseCase(submission_repo).execute(
        unscoped_admin, submission.id, SubmissionPatch(status=SubmissionStatus.APPROVED)
    )

    assert read.error.code == ErrorCode.FORBIDDEN
    assert updated.error.code == ErrorCode.FORBIDDEN
    stored = await submission_repo.get_submission(submission.id)
    assert stored.status == SubmissionStatus.PENDING
