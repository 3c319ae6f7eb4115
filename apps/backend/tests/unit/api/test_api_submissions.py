"""
Name: Trámites API Tests

Responsibilities:
  - Creation against active forms (409 FORM_UNAVAILABLE otherwise)
  - Scoped listing / reads over HTTP
  - Staff triage, delete and statistics endpoints
"""

import pytest

from app.domain.entities import SubmissionStatus
from app.identity.users import UserRole

from conftest import MUNICIPALITY_A, MUNICIPALITY_B

pytestmark = pytest.mark.unit


@pytest.fixture
def people(seed):
    seed.add_user("root", UserRole.SUPERADMIN)
    seed.add_user("admin-a", UserRole.ADMIN, municipality=MUNICIPALITY_A)
    seed.add_user("admin-b", UserRole.ADMIN, municipality=MUNICIPALITY_B)
    seed.add_user("vecino-1")
    seed.add_user("vecino-2")
    return seed


def test_citizen_creates_submission(client, people):
    form = people.add_form(title="Poda")

    res = client.post(
        "/api/tramites",
        headers=people.auth("vecino-1"),
        json={"formularioId": form.id, "respuestas": {"direccion": "Mitre 100"}},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Trámite creado exitosamente"
    assert body["data"]["usuarioId"] == "vecino-1"
    assert body["data"]["formularioTitulo"] == "Poda"
    assert body["data"]["municipio"] == MUNICIPALITY_A
    assert body["data"]["estado"] == "pendiente"


def test_submission_on_inactive_form_is_409(client, people):
    form = people.add_form(active=False)

    res = client.post(
        "/api/tramites", headers=people.auth("vecino-1"), json={"formularioId": form.id}
    )
    listed = client.get("/api/tramites", headers=people.auth("root"))

    assert res.status_code == 409
    assert res.json()["code"] == "FORM_UNAVAILABLE"
    assert listed.json()["total"] == 0


def test_submission_on_missing_form_is_404(client, people):
    res = client.post(
        "/api/tramites", headers=people.auth("vecino-1"), json={"formularioId": "no-existe"}
    )

    assert res.status_code == 404
    assert res.json()["detail"] == "Formulario 'no-existe' no encontrado"


def test_submissions_require_authentication(client):
    assert client.get("/api/tramites").status_code == 401
    assert client.post("/api/tramites", json={"formularioId": "x"}).status_code == 401


def test_list_is_scoped_per_role(client, people):
    form_a = people.add_form()
    form_b = people.add_form(municipality=MUNICIPALITY_B)
    people.add_submission(form_a)
    people.add_submission(form_a, submitter_id="vecino-2")
    people.add_submission(form_b)

    citizen = client.get(
        "/api/tramites", params={"usuarioId": "vecino-2"}, headers=people.auth("vecino-1")
    )
    admin = client.get("/api/tramites", headers=people.auth("admin-a"))
    root = client.get("/api/tramites", headers=people.auth("root"))

    assert citizen.json()["total"] == 2
    assert {s["usuarioId"] for s in citizen.json()["data"]} == {"vecino-1"}
    assert admin.json()["total"] == 2
    assert admin.json()["message"] == "Se encontraron 2 trámite(s)"
    assert root.json()["total"] == 3


def test_get_submission_ownership(client, people):
    form = people.add_form()
    submission = people.add_submission(form)

    own = client.get(f"/api/tramites/{submission.id}", headers=people.auth("vecino-1"))
    other = client.get(f"/api/tramites/{submission.id}", headers=people.auth("vecino-2"))
    foreign_admin = client.get(f"/api/tramites/{submission.id}", headers=people.auth("admin-b"))

    assert own.status_code == 200
    assert own.json()["message"] == "Trámite encontrado"
    assert other.status_code == 403
    assert foreign_admin.status_code == 403


def test_admin_updates_status(client, people):
    form = people.add_form()
    submission = people.add_submission(form)

    res = client.put(
        f"/api/tramites/{submission.id}",
        headers=people.auth("admin-a"),
        json={"estado": "en_revision", "comentarios": "Visita programada"},
    )
    by_citizen = client.put(
        f"/api/tramites/{submission.id}",
        headers=people.auth("vecino-1"),
        json={"estado": "aprobado"},
    )
    bad_status = client.put(
        f"/api/tramites/{submission.id}",
        headers=people.auth("admin-a"),
        json={"estado": "archivado"},
    )

    assert res.status_code == 200
    assert res.json()["message"] == "Trámite actualizado exitosamente"
    assert res.json()["data"]["estado"] == "en_revision"
    assert res.json()["data"]["comentarios"] == "Visita programada"
    assert by_citizen.status_code == 403
    assert bad_status.status_code == 400


def test_owner_deletes_own_submission(client, people):
    form = people.add_form()
    submission = people.add_submission(form)

    other = client.delete(f"/api/tramites/{submission.id}", headers=people.auth("vecino-2"))
    own = client.delete(f"/api/tramites/{submission.id}", headers=people.auth("vecino-1"))
    again = client.delete(f"/api/tramites/{submission.id}", headers=people.auth("vecino-1"))

    assert other.status_code == 403
    assert own.status_code == 200
    assert own.json()["message"] == "Trámite eliminado permanentemente"
    assert own.json()["data"] == {"id": submission.id}
    assert again.status_code == 404


def test_statistics(client, people):
    form_a = people.add_form()
    form_b = people.add_form(municipality=MUNICIPALITY_B)
    people.add_submission(form_a)
    people.add_submission(form_a, status=SubmissionStatus.APPROVED)
    people.add_submission(form_b, status=SubmissionStatus.REJECTED)

    root = client.get("/api/tramites/estadisticas", headers=people.auth("root"))
    admin = client.get(
        "/api/tramites/estadisticas",
        params={"municipio": MUNICIPALITY_B},
        headers=people.auth("admin-a"),
    )
    citizen = client.get("/api/tramites/estadisticas", headers=people.auth("vecino-1"))

    assert root.status_code == 200
    assert root.json()["message"] == "Estadísticas obtenidas correctamente"
    assert root.json()["data"] == {
        "total": 3,
        "pendientes": 1,
        "enRevision": 0,
        "aprobados": 1,
        "rechazados": 1,
        "municipio": "Todos",
    }
    assert admin.json()["data"]["municipio"] == MUNICIPALITY_A
    assert admin.json()["data"]["total"] == 2
    assert citizen.status_code == 403
