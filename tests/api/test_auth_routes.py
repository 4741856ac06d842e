"""HTTP tests for /auth endpoints and status-code mapping."""

import pytest

from terra_server.entities.user import AuthMethod

API = "/api/v1"


def _register(client, email="ana@example.com", password="secret123"):
    return client.post(f"{API}/auth/register", json={"full_name": "Ana", "email": email, "password": password})


def _login(client, email="ana@example.com", password="secret123"):
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})


class TestRegister:
    def test_created(self, client):
        resp = _register(client)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["email"] == "ana@example.com"
        assert data["auth_method"] == "email"
        assert data["role"] == "user"
        assert "password" not in data and "password_hash" not in data

    def test_duplicate(self, client):
        _register(client)
        resp = _register(client)

        assert resp.status_code == 409
        assert resp.get_json()["error"] == "email_taken"

    @pytest.mark.parametrize(
        "body",
        [
            {"full_name": "Ana", "email": "not-an-email", "password": "secret123"},
            {"full_name": "Ana", "email": "ana@example.com", "password": "123"},
            {"full_name": "", "email": "ana@example.com", "password": "secret123"},
            {"email": "ana@example.com", "password": "secret123"},
        ],
    )
    def test_validation(self, client, body):
        resp = client.post(f"{API}/auth/register", json=body)

        assert resp.status_code == 400
        payload = resp.get_json()
        assert payload["error"] == "validation_error"
        assert payload["details"]


class TestLogin:
    def test_success(self, client):
        _register(client)
        resp = _login(client)

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["access_token"] and data["refresh_token"]
        assert data["token_type"] == "Bearer"

    def test_wrong_password(self, client):
        _register(client)
        resp = _login(client, password="wrong-one")

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "invalid_credentials", "message": "Email or password is incorrect"}

    def test_unknown_email(self, client):
        resp = _login(client, email="ghost@example.com")
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_credentials"

    def test_google_account(self, client, make_user):
        make_user(email="g@example.com", auth_method=AuthMethod.GOOGLE.value)
        resp = _login(client, email="g@example.com")

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "wrong_method"


class TestGoogleLogin:
    def test_success(self, client, google_verifier):
        google_verifier.add("good", email="bia@example.com", name="Bia")
        resp = client.post(f"{API}/auth/login/google", json={"credential": "good"})

        assert resp.status_code == 200
        assert resp.get_json()["data"]["refresh_token"]

    def test_invalid(self, client):
        resp = client.post(f"{API}/auth/login/google", json={"credential": "bad"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_google_token"

    def test_unverified(self, client, google_verifier):
        google_verifier.add("unverified", email="bia@example.com", email_verified=False)
        resp = client.post(f"{API}/auth/login/google", json={"credential": "unverified"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "email_not_verified"

    def test_email_account(self, client, google_verifier):
        _register(client)
        google_verifier.add("good", email="ana@example.com")
        resp = client.post(f"{API}/auth/login/google", json={"credential": "good"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "wrong_method"


class TestSessionTokens:
    def test_refresh_then_logout(self, client):
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert resp.status_code == 200
        new_access = resp.get_json()["data"]["access_token"]
        me = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {new_access}"})
        assert me.status_code == 200
        assert me.get_json()["data"]["email"] == "ana@example.com"

        assert client.post(f"{API}/auth/logout", json={"refresh_token": tokens["refresh_token"]}).status_code == 200

        resp = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "token_invalid"

    def test_refresh_with_access_token(self, client):
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["access_token"]})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "wrong_purpose"

    def test_protected_route_rejects_refresh_token(self, client):
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "wrong_purpose"

    def test_protected_route_without_token(self, client):
        resp = client.get(f"{API}/users/me")
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "not_authorized"

    def test_protected_route_with_garbage_token(self, client):
        resp = client.get(f"{API}/users/me", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "token_invalid"


class TestPasswordReset:
    @pytest.mark.parametrize("email", ["ana@example.com", "ghost@example.com"])
    def test_forgot_password_always_ok(self, client, email):
        _register(client)
        resp = client.post(f"{API}/auth/forgot-password", json={"email": email})
        assert resp.status_code == 200

    def test_forgot_password_ok_when_smtp_fails(self, client, email_sender):
        _register(client)
        email_sender.error = OSError("smtp down")
        resp = client.post(f"{API}/auth/forgot-password", json={"email": "ana@example.com"})
        assert resp.status_code == 200

    def test_reset(self, client, jwt_provider):
        _register(client)
        token = jwt_provider.issue_reset_token(email="ana@example.com")

        resp = client.post(
            f"{API}/auth/reset-password",
            json={"token": token, "password": "brand-new", "confirm_password": "brand-new"},
        )

        assert resp.status_code == 200
        assert _login(client, password="brand-new").status_code == 200

    def test_mismatch(self, client):
        resp = client.post(
            f"{API}/auth/reset-password",
            json={"token": "whatever", "password": "brand-new", "confirm_password": "brand-old"},
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "password_mismatch"

    def test_bad_token(self, client):
        resp = client.post(
            f"{API}/auth/reset-password",
            json={"token": "whatever", "password": "brand-new", "confirm_password": "brand-new"},
        )
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "token_invalid"

    def test_google_account(self, client, make_user, jwt_provider):
        make_user(email="g@example.com", auth_method=AuthMethod.GOOGLE.value)
        token = jwt_provider.issue_reset_token(email="g@example.com")

        resp = client.post(
            f"{API}/auth/reset-password",
            json={"token": token, "password": "brand-new", "confirm_password": "brand-new"},
        )
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "not_authorized"
