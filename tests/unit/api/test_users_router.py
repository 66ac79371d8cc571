"""HTTP tests for the /api/users endpoints."""

from datetime import date
from unittest.mock import Mock

from fastapi.testclient import TestClient
from loguru import logger
from sqlalchemy.exc import OperationalError

from src.user_management.core.services import UserService
from src.user_management.core.validation import compute_age


def _create(client: TestClient, payload: dict) -> dict:
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateUserEndpoint:
    def test_create_returns_201_with_location(self, client: TestClient, user_payload):
        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["firstName"] == "Ann"
        assert body["lastName"] == "Lee"
        assert body["email"] == "ann@example.com"
        assert body["dateOfBirth"] == "2000-01-01"
        assert body["phoneNumber"] == "5551234567"
        assert body["age"] == compute_age(date(2000, 1, 1), date.today())
        assert response.headers["location"].endswith(f"/api/users/{body['id']}")

    def test_location_resolves_to_created_user(self, client: TestClient, user_payload):
        response = client.post("/api/users", json=user_payload)

        fetched = client.get(response.headers["location"])

        assert fetched.status_code == 200
        assert fetched.json() == response.json()

    def test_last_name_is_optional(self, client: TestClient, user_payload):
        del user_payload["lastName"]

        body = _create(client, user_payload)

        assert body["lastName"] is None

    def test_under_age_is_rejected(self, client: TestClient, user_payload, today):
        user_payload["dateOfBirth"] = date(today.year - 17, 1, 1).isoformat()

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 400
        assert response.json()["code"] == "AGE_TOO_YOUNG"
        assert response.json()["detail"] == "User must be 18 years or older."

    def test_eighteenth_birthday_today_is_accepted(self, client: TestClient, user_payload, today):
        user_payload["dateOfBirth"] = date(today.year - 18, today.month, today.day).isoformat()

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 201

    def test_invalid_phone_is_rejected(self, client: TestClient, user_payload):
        user_payload["phoneNumber"] = "555-123-4567"

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PHONE"
        assert response.json()["detail"] == "Phone number must be exactly 10 digits."

    def test_duplicate_email_is_rejected(self, client: TestClient, user_payload):
        _create(client, user_payload)

        user_payload["firstName"] = "Other"
        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_EMAIL"
        assert response.json()["detail"] == "Email address must be unique."
        assert len(client.get("/api/users").json()) == 1

    def test_malformed_body_is_rejected_with_400(self, client: TestClient, user_payload):
        del user_payload["firstName"]
        user_payload["dateOfBirth"] = "not-a-date"

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_REQUEST"
        failed_fields = {error["loc"][-1] for error in body["detail"]}
        assert {"firstName", "dateOfBirth"} <= failed_fields

    def test_first_name_longer_than_128_is_rejected(self, client: TestClient, user_payload):
        user_payload["firstName"] = "A" * 129

        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 400

    def test_snake_case_body_is_accepted(self, client: TestClient):
        response = client.post(
            "/api/users",
            json={
                "first_name": "Ann",
                "email": "ann@example.com",
                "date_of_birth": "2000-01-01",
                "phone_number": "5551234567",
            },
        )

        assert response.status_code == 201
        assert response.json()["firstName"] == "Ann"


class TestReadUserEndpoints:
    def test_list_is_empty_initially(self, client: TestClient):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_returns_all_users(self, client: TestClient, user_payload):
        first = _create(client, user_payload)
        second = _create(client, {**user_payload, "email": "bob@example.com", "firstName": "Bob"})

        response = client.get("/api/users")

        assert response.status_code == 200
        assert {u["id"] for u in response.json()} == {first["id"], second["id"]}

    def test_get_by_id(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_id_is_404(self, client: TestClient):
        response = client.get("/api/users/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"


class TestUpdateUserEndpoint:
    def test_update_phone_only(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "phoneNumber": "5559876543"},
        )

        assert response.status_code == 204
        assert response.content == b""

        fetched = client.get(f"/api/users/{created['id']}").json()
        assert fetched == {**created, "phoneNumber": "5559876543"}

    def test_update_unknown_id_is_404(self, client: TestClient, user_payload):
        response = client.put("/api/users/does-not-exist", json=user_payload)

        assert response.status_code == 404

    def test_update_validates_fields(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "phoneNumber": "123"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PHONE"

    def test_update_may_keep_own_email(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "firstName": "Annie"},
        )

        assert response.status_code == 204

    def test_update_to_taken_email_is_rejected(self, client: TestClient, user_payload):
        _create(client, {**user_payload, "email": "taken@example.com"})
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "email": "taken@example.com"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_EMAIL"

    def test_id_in_body_is_ignored(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.put(
            f"/api/users/{created['id']}",
            json={**user_payload, "id": "hijacked"},
        )

        assert response.status_code == 204
        assert client.get(f"/api/users/{created['id']}").status_code == 200
        assert client.get("/api/users/hijacked").status_code == 404


class TestDeleteUserEndpoint:
    def test_delete_then_get_is_404(self, client: TestClient, user_payload):
        created = _create(client, user_payload)

        response = client.delete(f"/api/users/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/users/{created['id']}").status_code == 404

    def test_delete_unknown_id_is_404(self, client: TestClient):
        response = client.delete("/api/users/does-not-exist")

        assert response.status_code == 404


class TestInternalErrors:
    """Unexpected failures become a generic 500 without leaking details."""

    def _failing_client(self, client: TestClient) -> TestClient:
        from src.user_management.api.http.app import app
        from src.user_management.api.http.deps import get_user_service

        repository = Mock()
        failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
        repository.get.side_effect = failure
        repository.list_all.side_effect = failure
        repository.email_exists.side_effect = failure

        app.dependency_overrides[get_user_service] = lambda: UserService(repository)
        return client

    def test_create_failure(self, client: TestClient, user_payload):
        response = self._failing_client(client).post("/api/users", json=user_payload)

        assert response.status_code == 500
        assert response.json()["detail"] == "An error occurred while creating the user"
        assert "connection refused" not in response.text

    def test_list_failure(self, client: TestClient):
        response = self._failing_client(client).get("/api/users")

        assert response.status_code == 500
        assert response.json()["detail"] == "An error occurred while retrieving users"

    def test_get_failure(self, client: TestClient):
        response = self._failing_client(client).get("/api/users/some-id")

        assert response.status_code == 500
        assert response.json()["detail"] == "An error occurred while retrieving the user"

    def test_update_failure(self, client: TestClient, user_payload):
        response = self._failing_client(client).put("/api/users/some-id", json=user_payload)

        assert response.status_code == 500
        assert response.json()["detail"] == "An error occurred while updating the user"

    def test_delete_failure(self, client: TestClient):
        response = self._failing_client(client).delete("/api/users/some-id")

        assert response.status_code == 500
        assert response.json()["detail"] == "An error occurred while deleting the user"

    def test_failures_are_logged_with_operation_and_id(
        self, client: TestClient, user_payload
    ):
        messages: list[str] = []
        handler_id = logger.add(
            lambda message: messages.append(message.record["message"]), level="ERROR"
        )
        try:
            failing = self._failing_client(client)
            failing.post("/api/users", json=user_payload)
            failing.get("/api/users")
            failing.get("/api/users/some-id")
            failing.put("/api/users/some-id", json=user_payload)
            failing.delete("/api/users/some-id")
        finally:
            logger.remove(handler_id)

        assert "Error creating user" in messages
        assert "Error retrieving users" in messages
        assert "Error retrieving user with ID: some-id" in messages
        assert "Error updating user with ID: some-id" in messages
        assert "Error deleting user with ID: some-id" in messages
