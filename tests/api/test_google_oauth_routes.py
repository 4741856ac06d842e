"""HTTP tests for the Google redirect login flow."""

from terra_server.core.interfaces.google_identity import GoogleIdentity


class TestGoogleRedirectLogin:
    def test_login_sets_state_cookie_and_redirects(self, client):
        resp = client.get("/auth/google/login")

        assert resp.status_code == 307
        assert resp.headers["Location"].startswith("https://accounts.google.com/")

        cookie = resp.headers["Set-Cookie"]
        assert cookie.startswith("oauth_state=")
        assert "HttpOnly" in cookie

        state = cookie.split(";")[0].split("=", 1)[1]
        assert f"state={state}" in resp.headers["Location"]

    def test_callback_logs_in(self, client, google_oauth):
        google_oauth.identity = GoogleIdentity(email="bia@example.com", email_verified=True, name="Bia")
        client.set_cookie("oauth_state", "s3cr3t")

        resp = client.get("/auth/google/callback?state=s3cr3t&code=abc")

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["user"]["email"] == "bia@example.com"
        assert data["user"]["auth_method"] == "google"
        assert data["access_token"] and data["refresh_token"]
        assert google_oauth.codes == ["abc"]
        assert "oauth_state=;" in resp.headers["Set-Cookie"]

    def test_state_mismatch(self, client, google_oauth):
        client.set_cookie("oauth_state", "expected")

        resp = client.get("/auth/google/callback?state=forged&code=abc")

        assert resp.status_code == 400
        assert google_oauth.codes == []
        assert "oauth_state=;" in resp.headers["Set-Cookie"]

    def test_missing_state_cookie(self, client):
        resp = client.get("/auth/google/callback?state=anything&code=abc")
        assert resp.status_code == 400

    def test_missing_code(self, client):
        client.set_cookie("oauth_state", "s3cr3t")
        resp = client.get("/auth/google/callback?state=s3cr3t")
        assert resp.status_code == 400

    def test_unverified_profile(self, client, google_oauth):
        google_oauth.identity = GoogleIdentity(email="bia@example.com", email_verified=False)
        client.set_cookie("oauth_state", "s3cr3t")

        resp = client.get("/auth/google/callback?state=s3cr3t&code=abc")

        assert resp.status_code == 401
        assert resp.get_json()["error"] == "email_not_verified"

    def test_code_exchange_failure(self, client):
        client.set_cookie("oauth_state", "s3cr3t")
        resp = client.get("/auth/google/callback?state=s3cr3t&code=abc")

        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_google_token"
