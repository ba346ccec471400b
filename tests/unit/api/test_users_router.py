"""Tests for the /api/users endpoints."""

import pytest

from src.users_api.core.services import UserManagementService


def _create(client, payload) -> dict:
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    def test_create_returns_201_with_wire_names(self, client, user_payload):
        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"id", "name", "whatsapp", "email", "role"}
        assert body["name"] == "Juan Pérez"
        assert body["whatsapp"] == "+1234567890"
        assert body["email"] == "juan@example.com"
        assert body["role"] == "client"

    def test_create_admin(self, client, user_payload):
        body = _create(client, {**user_payload, "role": "admin"})

        assert body["role"] == "admin"

    def test_create_without_role_field(self, client, user_payload):
        payload = {k: v for k, v in user_payload.items() if k != "role"}

        assert _create(client, payload)["role"] == "client"

    @pytest.mark.parametrize(
        ("overrides", "fragment"),
        [
            ({"whatsapp": "abc"}, "whatsapp"),
            ({"email": "not-an-email"}, "email"),
            ({"name": ""}, "name"),
            ({"role": "superuser"}, "role"),
        ],
    )
    def test_invalid_payload_returns_400(self, client, user_payload, overrides, fragment):
        response = client.post("/api/users", json={**user_payload, **overrides})

        assert response.status_code == 400
        assert fragment in response.json()["detail"]

    def test_first_error_only(self, client):
        response = client.post("/api/users", json={"email": "bad", "whatsapp": "abc"})

        assert response.status_code == 400
        assert response.json()["detail"] == "The name field is required"

    def test_missing_body_returns_400(self, client):
        response = client.post("/api/users")

        assert response.status_code == 400
        assert response.json()["detail"] == "User data is required"

    def test_numeric_whatsapp_is_accepted(self, client, user_payload):
        body = _create(client, {**user_payload, "whatsapp": 1234567890})

        assert body["whatsapp"] == "1234567890"

    def test_numeric_name_is_accepted_as_text(self, client, user_payload):
        assert _create(client, {**user_payload, "name": 123})["name"] == "123"

    def test_phone_field_name_is_not_a_wire_name(self, client, user_payload):
        payload = {k: v for k, v in user_payload.items() if k != "whatsapp"}

        response = client.post("/api/users", json={**payload, "phone": "+1234567890"})

        assert response.status_code == 400
        assert response.json()["detail"] == "The whatsapp field is required"

    def test_rejected_payload_is_not_stored(self, client, user_payload, repository):
        client.post("/api/users", json={**user_payload, "whatsapp": "abc"})

        assert repository.count() == 0


class TestRead:
    def test_list_empty(self, client):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_users(self, client, user_payload):
        first = _create(client, user_payload)
        second = _create(client, {**user_payload, "name": "Ana"})

        response = client.get("/api/users")

        assert response.status_code == 200
        assert {u["id"] for u in response.json()} == {first["id"], second["id"]}

    def test_get_user(self, client, user_payload):
        created = _create(client, user_payload)

        response = client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_user(self, client):
        response = client.get("/api/users/does-not-exist")

        assert response.status_code == 404


class TestUpdate:
    def test_update_user(self, client, user_payload):
        created = _create(client, {**user_payload, "role": "admin"})

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "name": "Juan P.", "role": ""},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["name"] == "Juan P."
        assert body["role"] == "client"

    def test_update_missing_user_returns_404(self, client, user_payload, repository):
        response = client.put("/api/users/never-created", json=user_payload)

        assert response.status_code == 404
        assert repository.count() == 0

    def test_update_invalid_payload_returns_400(self, client, user_payload):
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}", json={**user_payload, "email": ""}
        )

        assert response.status_code == 400
        assert "email" in response.json()["detail"]

    def test_update_missing_body_returns_400(self, client, user_payload):
        created = _create(client, user_payload)

        response = client.put(f"/api/users/{created['id']}")

        assert response.status_code == 400


class TestDelete:
    def test_delete_user(self, client, user_payload):
        created = _create(client, user_payload)

        response = client.delete(f"/api/users/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/users/{created['id']}").status_code == 404

    def test_delete_missing_user(self, client):
        assert client.delete("/api/users/does-not-exist").status_code == 404


class TestReport:
    def test_empty_report(self, client):
        response = client.get("/api/users/report")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == "attachment; filename=users_report.csv"
        )
        assert response.text == "ID,Name,WhatsApp,Email,Role\n"

    def test_report_contains_users(self, client, user_payload):
        created = _create(client, {**user_payload, "name": 'O\'Brien, "Jr"'})

        lines = client.get("/api/users/report").text.splitlines()

        assert lines[1] == (
            f'{created["id"]},"O\'Brien, ""Jr""",+1234567890,juan@example.com,client'
        )


class TestErrorHandling:
    def test_unexpected_error_returns_500_without_details(
        self, client, user_payload, monkeypatch
    ):
        def boom(self, user_request):
            raise RuntimeError("secret internal state")

        monkeypatch.setattr(UserManagementService, "create_user", boom)

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == "Internal Server Error"
        assert "secret" not in response.text
        assert body["request_id"] == response.headers["X-Request-ID"]

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/users", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_http_errors_pass_through_with_request_id(self, client):
        response = client.get(
            "/api/users/does-not-exist", headers={"X-Request-ID": "req-404"}
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}
        assert response.headers["X-Request-ID"] == "req-404"

    def test_non_string_payload_returns_422(self, client, user_payload):
        response = client.post(
            "/api/users", json={**user_payload, "whatsapp": ["+1234567890"]}
        )

        assert response.status_code == 422
        assert "request_id" not in response.json()

    def test_security_headers(self, client):
        response = client.get("/api/users")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
