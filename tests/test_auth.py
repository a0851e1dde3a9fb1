from shared.utils.enums import UserRole

from .conftest import data

SIGNUP = {
    "email": "Owner@GrandHotel.com.br",
    "password": "secret123",
    "first_name": "Ana",
    "last_name": "Souza",
}


# ============================================================================
# SIGNUP
# ============================================================================

class TestSignup:

    def test_first_user_becomes_super_admin(self, auth_client):
        response = auth_client.post("/api/auth/signup", json=SIGNUP)
        assert response.status_code == 200

        body = data(response)
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["email"] == "owner@grandhotel.com.br"
        assert body["user"]["role"] == UserRole.SUPER_ADMIN.value
        assert body["user"]["hotel_id"] is None
        assert "password" not in body["user"]
        assert "auth-token" in response.headers.get("set-cookie", "")

    def test_later_users_are_staff(self, auth_client):
        auth_client.post("/api/auth/signup", json=SIGNUP)
        response = auth_client.post("/api/auth/signup", json={
            **SIGNUP, "email": "clerk@grandhotel.com.br"})
        assert response.status_code == 200
        assert data(response)["user"]["role"] == UserRole.STAFF.value

    def test_duplicate_email_case_insensitive(self, auth_client):
        auth_client.post("/api/auth/signup", json=SIGNUP)
        response = auth_client.post("/api/auth/signup", json={
            **SIGNUP, "email": "owner@grandhotel.com.br"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"
        assert response.json()["status_code"] == "2003"

    def test_short_password(self, auth_client):
        response = auth_client.post("/api/auth/signup", json={**SIGNUP, "password": "123"})
        assert response.status_code == 400
        assert response.json()["status_code"] == "2001"

    def test_invalid_email(self, auth_client):
        response = auth_client.post("/api/auth/signup", json={**SIGNUP, "email": "not-an-email"})
        assert response.status_code == 400


# ============================================================================
# SIGNIN / SIGNOUT / ME
# ============================================================================

class TestSignin:

    def test_signin_success(self, auth_client, make_user, hotel):
        make_user(UserRole.MANAGER, hotel, email="manager@grandhotel.com.br", password="secret123")
        response = auth_client.post("/api/auth/signin", json={
            "email": "MANAGER@grandhotel.com.br", "password": "secret123"})
        assert response.status_code == 200

        user = data(response)["user"]
        assert user["role"] == UserRole.MANAGER.value
        assert user["hotel"]["code"] == "GRD"
        assert user["last_login"] is not None

    def test_wrong_password(self, auth_client, make_user, hotel):
        make_user(UserRole.MANAGER, hotel, email="manager@grandhotel.com.br", password="secret123")
        response = auth_client.post("/api/auth/signin", json={
            "email": "manager@grandhotel.com.br", "password": "wrong-one"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_unknown_email(self, auth_client):
        response = auth_client.post("/api/auth/signin", json={
            "email": "ghost@grandhotel.com.br", "password": "secret123"})
        assert response.status_code == 401

    def test_inactive_user(self, auth_client, make_user, hotel):
        make_user(UserRole.STAFF, hotel, email="gone@grandhotel.com.br",
                  password="secret123", active=False)
        response = auth_client.post("/api/auth/signin", json={
            "email": "gone@grandhotel.com.br", "password": "secret123"})
        assert response.status_code == 403

    def test_me_with_cookie(self, auth_client):
        auth_client.post("/api/auth/signup", json=SIGNUP)
        response = auth_client.get("/api/auth/me")
        assert response.status_code == 200
        assert data(response)["full_name"] == "Ana Souza"

    def test_me_requires_credential(self, auth_client):
        assert auth_client.get("/api/auth/me").status_code == 401

    def test_signout_clears_cookie(self, auth_client):
        auth_client.post("/api/auth/signup", json=SIGNUP)
        response = auth_client.post("/api/auth/signout")
        assert response.status_code == 200
        assert data(response)["message"] == "Signed out successfully"
        assert "auth-token=" in response.headers.get("set-cookie", "")

    def test_token_accepted_by_hotel_service(self, auth_client, client):
        token = data(auth_client.post("/api/auth/signup", json=SIGNUP))["access_token"]
        response = client.get("/api/hotels", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
