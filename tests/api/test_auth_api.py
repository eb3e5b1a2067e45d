"""
API tests for registration, login, logout and the current-user endpoint.
"""

from tests.conftest import register


class TestSessionAuth:
    def test_register_returns_user_without_credential(self, client):
        response = client.post("/api/register", json={"username": "alice", "password": "secret1"})

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert set(body) == {"id", "username"}
        assert "secret1" not in response.text

    def test_register_duplicate_username(self, client):
        register(client)

        response = client.post("/api/register", json={"username": "alice", "password": "other"})

        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"

    def test_register_missing_fields(self, client):
        response = client.post("/api/register", json={"username": "alice"})

        assert response.status_code == 400
        assert "errors" in response.json()

    def test_register_establishes_session(self, client):
        user = register(client)

        response = client.get("/api/user")

        assert response.status_code == 200
        assert response.json() == {"id": user["id"], "username": "alice"}

    def test_login_and_current_user(self, client):
        user = register(client)
        client.post("/api/logout")

        response = client.post("/api/login", json={"username": "alice", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]
        assert client.get("/api/user").json()["username"] == "alice"

    def test_login_failures_are_indistinguishable(self, client):
        register(client)
        client.post("/api/logout")

        wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
        unknown_user = client.post("/api/login", json={"username": "bob", "password": "secret1"})

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()

    def test_current_user_requires_session(self, client):
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}

    def test_logout_is_idempotent(self, client):
        register(client)

        assert client.post("/api/logout").status_code == 200
        assert client.get("/api/user").status_code == 401
        assert client.post("/api/logout").status_code == 200

    def test_forged_cookie_rejected(self, client, settings):
        client.cookies.set(settings.session_cookie_name, "forged-session-id")

        assert client.get("/api/user").status_code == 401


class TestTokenAuth:
    def test_register_returns_access_token(self, token_client):
        response = token_client.post("/api/register", json={"username": "alice", "password": "secret1"})

        assert response.status_code == 201
        body = response.json()
        assert body["accessToken"]
        assert "set-cookie" not in response.headers

    def test_bearer_token_identifies_user(self, token_client):
        token = register(token_client)["accessToken"]

        response = token_client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    def test_login_issues_token(self, token_client):
        register(token_client)

        response = token_client.post("/api/login", json={"username": "alice", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["accessToken"]

    def test_missing_or_bad_token(self, token_client):
        assert token_client.get("/api/user").status_code == 401
        response = token_client.get("/api/user", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401


class TestHealth:
    def test_health_reports_backends(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "storage": "memory", "auth_scheme": "session"}
