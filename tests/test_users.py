from shared.utils.enums import UserRole

from .conftest import data, headers_for

NEW_USER = {
    "email": "New.Clerk@GrandHotel.com.br",
    "password": "secret123",
    "first_name": "Paula",
    "last_name": "Lima",
    "role": "RECEPTIONIST",
}


# ============================================================================
# ACCESS
# ============================================================================

class TestUserAccess:

    def test_manager_cannot_manage_users(self, client, headers):
        assert client.get("/api/users", headers=headers[UserRole.MANAGER]).status_code == 403

    def test_hotel_admin_sees_own_hotel(self, client, headers, other_headers):
        body = data(client.get("/api/users", headers=headers[UserRole.HOTEL_ADMIN]))
        roles = {u["role"] for u in body["users"]}
        assert body["total"] == 4
        assert UserRole.SUPER_ADMIN.value not in roles

    def test_super_admin_sees_everyone(self, client, headers, other_headers):
        body = data(client.get("/api/users", headers=headers[UserRole.SUPER_ADMIN]))
        assert body["total"] == 8

    def test_role_filter(self, client, headers):
        body = data(client.get("/api/users", headers=headers[UserRole.HOTEL_ADMIN],
                               params={"role": "staff"}))
        assert [u["role"] for u in body["users"]] == ["STAFF"]

    def test_password_is_never_returned(self, client, headers, users):
        body = data(client.get(f"/api/users/{users[UserRole.STAFF].id}",
                               headers=headers[UserRole.HOTEL_ADMIN]))
        assert "password" not in body
        assert body["hotel"]["code"] == "GRD"

    def test_other_hotel_user_is_forbidden(self, client, headers, make_user, other_hotel):
        stranger = make_user(UserRole.STAFF, other_hotel)
        response = client.get(f"/api/users/{stranger.id}", headers=headers[UserRole.HOTEL_ADMIN])
        assert response.status_code == 403


# ============================================================================
# CREATE
# ============================================================================

class TestCreateUser:

    def test_hotel_admin_creates_in_own_hotel(self, client, headers, hotel, other_hotel):
        response = client.post("/api/users", headers=headers[UserRole.HOTEL_ADMIN], json={
            **NEW_USER, "hotel_id": str(other_hotel.id)})
        assert response.status_code == 200
        body = data(response)
        assert body["email"] == "new.clerk@grandhotel.com.br"
        assert body["hotel_id"] == str(hotel.id)
        assert body["is_active"] is True

    def test_hotel_admin_cannot_create_admins(self, client, headers):
        for role in ("HOTEL_ADMIN", "SUPER_ADMIN"):
            response = client.post("/api/users", headers=headers[UserRole.HOTEL_ADMIN], json={
                **NEW_USER, "role": role})
            assert response.status_code == 403
            assert response.json()["message"] == "Cannot create admin users"

    def test_super_admin_user_has_no_hotel(self, client, headers, hotel):
        response = client.post("/api/users", headers=headers[UserRole.SUPER_ADMIN], json={
            **NEW_USER, "role": "SUPER_ADMIN", "hotel_id": str(hotel.id)})
        assert response.status_code == 200
        assert data(response)["hotel_id"] is None

    def test_super_admin_must_name_hotel_for_staff(self, client, headers):
        response = client.post("/api/users", headers=headers[UserRole.SUPER_ADMIN], json=NEW_USER)
        assert response.status_code == 400

    def test_duplicate_email(self, client, headers, users):
        response = client.post("/api/users", headers=headers[UserRole.HOTEL_ADMIN], json={
            **NEW_USER, "email": users[UserRole.STAFF].email.upper()})
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_created_user_can_sign_in(self, client, auth_client, headers):
        client.post("/api/users", headers=headers[UserRole.HOTEL_ADMIN], json=NEW_USER)
        response = auth_client.post("/api/auth/signin", json={
            "email": "new.clerk@grandhotel.com.br", "password": "secret123"})
        assert response.status_code == 200


# ============================================================================
# UPDATE / DELETE
# ============================================================================

class TestUpdateUser:

    def test_update_profile(self, client, headers, users):
        staff = users[UserRole.STAFF]
        response = client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                              json={"first_name": "Renata", "role": "RECEPTIONIST"})
        assert response.status_code == 200
        body = data(response)
        assert body["full_name"] == "Renata Tester"
        assert body["role"] == "RECEPTIONIST"

    def test_hotel_admin_cannot_grant_admin(self, client, headers, users):
        staff = users[UserRole.STAFF]
        response = client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                              json={"role": "HOTEL_ADMIN"})
        assert response.status_code == 403

    def test_hotel_admin_cannot_move_users(self, client, headers, users, hotel, other_hotel):
        staff = users[UserRole.STAFF]
        body = data(client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                               json={"hotel_id": str(other_hotel.id)}))
        assert body["hotel_id"] == str(hotel.id)

    def test_email_change_rechecks_uniqueness(self, client, headers, users):
        staff, manager = users[UserRole.STAFF], users[UserRole.MANAGER]
        response = client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                              json={"email": manager.email})
        assert response.status_code == 400

    def test_deactivated_user_is_locked_out(self, client, headers, users):
        staff = users[UserRole.STAFF]
        client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                   json={"is_active": False})
        assert client.get("/api/rooms", headers=headers[UserRole.STAFF]).status_code == 403

    def test_promoted_user_gains_rights_immediately(self, client, headers, users, room_type):
        staff = users[UserRole.STAFF]
        old_token = headers_for(staff)
        client.put(f"/api/users/{staff.id}", headers=headers[UserRole.HOTEL_ADMIN],
                   json={"role": "MANAGER"})
        response = client.post("/api/rooms", headers=old_token, json={
            "number": "777", "room_type_id": str(room_type.id)})
        assert response.status_code == 200


class TestDeleteUser:

    def test_soft_delete(self, client, headers, users):
        staff = users[UserRole.STAFF]
        admin = headers[UserRole.HOTEL_ADMIN]
        response = client.delete(f"/api/users/{staff.id}", headers=admin)
        assert response.status_code == 200
        assert client.get(f"/api/users/{staff.id}", headers=admin).status_code == 404
        assert client.get("/api/rooms", headers=headers[UserRole.STAFF]).status_code == 401

    def test_cannot_delete_self(self, client, headers, users):
        admin = users[UserRole.HOTEL_ADMIN]
        response = client.delete(f"/api/users/{admin.id}", headers=headers[UserRole.HOTEL_ADMIN])
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete your own account"

    def test_hotel_admin_cannot_delete_admins(self, client, headers, make_user, hotel):
        peer = make_user(UserRole.HOTEL_ADMIN, hotel)
        response = client.delete(f"/api/users/{peer.id}", headers=headers[UserRole.HOTEL_ADMIN])
        assert response.status_code == 403

    def test_super_admin_deletes_admin(self, client, headers, users):
        admin = users[UserRole.HOTEL_ADMIN]
        response = client.delete(f"/api/users/{admin.id}", headers=headers[UserRole.SUPER_ADMIN])
        assert response.status_code == 200
