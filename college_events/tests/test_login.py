"""Tests for login endpoint."""

from fastapi.testclient import TestClient


class TestLogin:
    """Test cases for POST /api/auth/login endpoint."""

    def test_login_success(self, client: TestClient, authenticated_user):
        """Test successful login returns a fresh token and the user."""
        response = client.post(
            "/api/auth/login",
            json={
                "email": authenticated_user["user"]["email"],
                "password": authenticated_user["password"],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["id"] == authenticated_user["user"]["id"]
        assert data["user"]["email"] == authenticated_user["user"]["email"]
        assert "password" not in data["user"]

    def test_login_token_authenticates(self, client: TestClient, authenticated_user):
        """Test the login token can be used as a bearer token."""
        token = client.post(
            "/api/auth/login",
            json={
                "email": authenticated_user["user"]["email"],
                "password": authenticated_user["password"],
            },
        ).json()["token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["id"] == authenticated_user["user"]["id"]

    def test_login_wrong_password(self, client: TestClient, authenticated_user):
        """Test login fails with wrong password."""
        response = client.post(
            "/api/auth/login",
            json={
                "email": authenticated_user["user"]["email"],
                "password": "wrongpassword",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_unknown_email_matches_wrong_password(
        self, client: TestClient, authenticated_user
    ):
        """Test unknown email and wrong password are indistinguishable."""
        wrong_password = client.post(
            "/api/auth/login",
            json={"email": authenticated_user["user"]["email"], "password": "wrongpass"},
        )
        unknown_email = client.post(
            "/api/auth/login",
            json={"email": "unknown@college.edu", "password": "anything"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json()
        assert unknown_email.json()["code"] == "INVALID_CREDENTIALS"

    def test_login_missing_password(self, client: TestClient):
        """Test login without a password is a validation error."""
        response = client.post("/api/auth/login", json={"email": "ada@college.edu"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
