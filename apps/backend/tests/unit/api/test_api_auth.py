"""
Name: Auth + Users API Tests

Responsibilities:
  - Login / profile over bearer tokens
  - 401 / 403 / 404 authentication failures (RFC7807)
  - Superadmin user management endpoints
"""

from datetime import timedelta

import pytest

from app.identity.users import UserRole

from conftest import MUNICIPALITY_A

pytestmark = pytest.mark.unit


# =============================================================================
# Sesión
# =============================================================================


def test_login_returns_profile_and_records_last_access(client, seed):
    seed.add_user("vecino-1")

    res = client.post("/api/auth/login", headers=seed.auth("vecino-1"))

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Login exitoso"
    assert body["data"]["uid"] == "vecino-1"
    assert body["data"]["rol"] == "usuario"
    assert body["data"]["ultimoAcceso"] is not None


def test_perfil_returns_own_record(client, seed):
    seed.add_user("admin-a", UserRole.ADMIN, municipality=MUNICIPALITY_A)

    res = client.get("/api/auth/perfil", headers=seed.auth("admin-a"))

    assert res.status_code == 200
    assert res.json()["message"] == "Perfil obtenido correctamente"
    assert res.json()["data"]["municipio"] == MUNICIPALITY_A


def test_missing_token_is_401_with_challenge(client):
    res = client.get("/api/auth/perfil")

    assert res.status_code == 401
    assert res.headers["content-type"].startswith("application/problem+json")
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["code"] == "UNAUTHORIZED"


def test_expired_token_is_401_token_expired(client, seed):
    seed.add_user("vecino-1")
    token = seed.token("vecino-1", ttl=timedelta(minutes=-5))

    res = client.get("/api/auth/perfil", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["code"] == "TOKEN_EXPIRED"


def test_garbage_token_is_401_token_invalid(client):
    res = client.get("/api/auth/perfil", headers={"Authorization": "Bearer basura"})

    assert res.status_code == 401
    assert res.json()["code"] == "TOKEN_INVALID"


def test_inactive_account_is_403(client, seed):
    seed.add_user("vecino-1", active=False)

    res = client.post("/api/auth/login", headers=seed.auth("vecino-1"))

    assert res.status_code == 403
    assert res.json()["code"] == "ACCOUNT_INACTIVE"


def test_token_without_user_record_is_404(client, seed):
    res = client.get("/api/auth/perfil", headers=seed.auth("fantasma"))

    assert res.status_code == 404
    assert res.json()["detail"] == "Usuario no encontrado"


# =============================================================================
# Gestión de usuarios
# =============================================================================


def test_superadmin_registers_admin(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)

    res = client.post(
        "/api/auth/registro",
        headers=seed.auth("root"),
        json={
            "email": "admin@coacalco.gob",
            "password": "secreto",
            "nombre": "Admin Coacalco",
            "rol": "admin",
            "municipio": "Coacalco",
        },
    )

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Usuario registrado exitosamente"
    assert body["data"]["rol"] == "admin"
    assert body["data"]["municipio"] == "Coacalco"


def test_register_admin_without_municipality_is_400(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)

    res = client.post(
        "/api/auth/registro",
        headers=seed.auth("root"),
        json={
            "email": "admin@coacalco.gob",
            "password": "secreto",
            "nombre": "Admin Coacalco",
            "rol": "admin",
        },
    )

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_register_with_invalid_payload_lists_fields(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)

    res = client.post(
        "/api/auth/registro",
        headers=seed.auth("root"),
        json={"email": "no-es-email", "password": "1", "nombre": "Al", "rol": "jefe"},
    )

    assert res.status_code == 400
    fields = {e.get("field") for e in res.json()["errors"]}
    assert {"email", "password", "nombre", "rol"} <= fields


def test_admin_cannot_register_users(client, seed):
    seed.add_user("admin-a", UserRole.ADMIN, municipality=MUNICIPALITY_A)

    res = client.post(
        "/api/auth/registro",
        headers=seed.auth("admin-a"),
        json={"email": "x@y.com", "password": "secreto", "nombre": "Vecino", "rol": "usuario"},
    )

    assert res.status_code == 403
    assert res.json()["code"] == "FORBIDDEN"


def test_list_and_filter_users(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)
    seed.add_user("admin-a", UserRole.ADMIN, municipality=MUNICIPALITY_A)
    seed.add_user("vecino-1")

    res = client.get("/api/auth/usuarios", params={"rol": "admin"}, headers=seed.auth("root"))

    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 1
    assert body["message"] == "Se encontraron 1 usuario(s)"
    assert body["data"][0]["uid"] == "admin-a"


def test_citizen_reads_only_own_user(client, seed):
    seed.add_user("vecino-1")
    seed.add_user("vecino-2")

    own = client.get("/api/auth/usuarios/vecino-1", headers=seed.auth("vecino-1"))
    other = client.get("/api/auth/usuarios/vecino-2", headers=seed.auth("vecino-1"))

    assert own.status_code == 200
    assert own.json()["message"] == "Usuario encontrado"
    assert other.status_code == 403


def test_update_user_promotes_with_municipality(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)
    seed.add_user("vecino-1")

    res = client.put(
        "/api/auth/usuarios/vecino-1",
        headers=seed.auth("root"),
        json={"rol": "admin", "municipio": MUNICIPALITY_A},
    )

    assert res.status_code == 200
    assert res.json()["message"] == "Usuario actualizado exitosamente"
    assert res.json()["data"]["rol"] == "admin"


def test_update_missing_user_is_404(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)

    res = client.put(
        "/api/auth/usuarios/nadie", headers=seed.auth("root"), json={"nombre": "Nuevo"}
    )

    assert res.status_code == 404
    assert res.json()["detail"] == "Usuario 'nadie' no encontrado"


def test_deactivate_user_blocks_further_access(client, seed):
    seed.add_user("root", UserRole.SUPERADMIN)
    seed.add_user("vecino-1")
    headers = seed.auth("vecino-1")

    res = client.delete("/api/auth/usuarios/vecino-1", headers=seed.auth("root"))
    after = client.get("/api/auth/perfil", headers=headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Usuario desactivado correctamente"
    assert res.json()["data"] == {"uid": "vecino-1", "activo": False}
    assert after.status_code == 401
