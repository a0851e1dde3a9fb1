from uuid import uuid4

import pytest
from fastapi import HTTPException

from shared.core.auth import (
    can_access_hotel,
    create_access_token,
    has_minimum_role,
    resolve_hotel_scope,
    resolve_target_hotel,
    token_payload,
    verify_token,
)
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole

from .conftest import data, headers_for


def make_token(role: UserRole, hotel_id=None) -> UserToken:
    return UserToken(user_id=uuid4(), email="someone@grandhotel.com.br",
                     role=role, hotel_id=hotel_id)


# ============================================================================
# ROLE HIERARCHY
# ============================================================================

class TestRoleHierarchy:

    @pytest.mark.parametrize("role,minimum,expected", [
        (UserRole.SUPER_ADMIN, UserRole.HOTEL_ADMIN, True),
        (UserRole.HOTEL_ADMIN, UserRole.HOTEL_ADMIN, True),
        (UserRole.MANAGER, UserRole.HOTEL_ADMIN, False),
        (UserRole.RECEPTIONIST, UserRole.MANAGER, False),
        (UserRole.RECEPTIONIST, UserRole.RECEPTIONIST, True),
        (UserRole.STAFF, UserRole.RECEPTIONIST, False),
        (UserRole.STAFF, UserRole.STAFF, True),
    ])
    def test_has_minimum_role(self, role, minimum, expected):
        assert has_minimum_role(make_token(role), minimum) is expected


# ============================================================================
# HOTEL SCOPE
# ============================================================================

class TestHotelScope:

    def test_super_admin_can_access_any_hotel(self):
        assert can_access_hotel(make_token(UserRole.SUPER_ADMIN), uuid4())

    def test_staff_only_accesses_own_hotel(self):
        own = uuid4()
        user = make_token(UserRole.MANAGER, own)
        assert can_access_hotel(user, own)
        assert can_access_hotel(user, str(own))
        assert not can_access_hotel(user, uuid4())

    def test_user_without_hotel_accesses_nothing(self):
        assert not can_access_hotel(make_token(UserRole.STAFF), uuid4())

    def test_resolve_scope_super_admin_keeps_request(self):
        requested = uuid4()
        assert resolve_hotel_scope(make_token(UserRole.SUPER_ADMIN), requested) == requested
        assert resolve_hotel_scope(make_token(UserRole.SUPER_ADMIN)) is None

    def test_resolve_scope_forces_own_hotel(self):
        own = uuid4()
        user = make_token(UserRole.RECEPTIONIST, own)
        assert resolve_hotel_scope(user, uuid4()) == own

    def test_target_hotel_required_for_super_admin(self):
        with pytest.raises(HTTPException) as exc:
            resolve_target_hotel(make_token(UserRole.SUPER_ADMIN))
        assert exc.value.status_code == 400
        assert exc.value.detail["message"] == "Hotel ID is required"

    def test_target_hotel_ignores_requested_for_staff(self):
        own = uuid4()
        user = make_token(UserRole.MANAGER, own)
        assert resolve_target_hotel(user, uuid4()) == own

    def test_target_hotel_missing_for_hotelless_staff(self):
        with pytest.raises(HTTPException) as exc:
            resolve_target_hotel(make_token(UserRole.STAFF))
        assert exc.value.status_code == 400


# ============================================================================
# TOKENS
# ============================================================================

class TestTokens:

    def test_round_trip_claims(self, users, hotel):
        manager = users[UserRole.MANAGER]
        token = verify_token(create_access_token(token_payload(manager)))
        assert token.user_id == manager.id
        assert token.role == UserRole.MANAGER
        assert token.hotel_id == hotel.id

    def test_garbage_token_is_rejected(self):
        with pytest.raises(HTTPException) as exc:
            verify_token("not-a-jwt")
        assert exc.value.status_code == 401

    def test_token_without_user_is_rejected(self):
        with pytest.raises(HTTPException) as exc:
            verify_token(create_access_token({"role": "STAFF"}))
        assert exc.value.status_code == 401


# ============================================================================
# GUARD OVER HTTP
# ============================================================================

class TestGuardEndpoints:

    def test_health_is_public(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert data(response)["status"] == "healthy"

    def test_missing_credential(self, client):
        response = client.get("/api/rooms")
        assert response.status_code == 401
        body = response.json()
        assert body["status"] == "Failure"
        assert body["message"] == "Not authenticated"

    def test_invalid_bearer(self, client):
        response = client.get("/api/rooms", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_cookie_carrier(self, client, users):
        token = create_access_token(token_payload(users[UserRole.STAFF]))
        client.cookies.set("auth-token", token)
        assert client.get("/api/rooms").status_code == 200

    def test_inactive_user_is_forbidden(self, client, make_user, hotel):
        user = make_user(UserRole.MANAGER, hotel, active=False)
        response = client.get("/api/rooms", headers=headers_for(user))
        assert response.status_code == 403

    def test_deleted_user_is_unauthenticated(self, client, db, users):
        staff = users[UserRole.STAFF]
        headers = headers_for(staff)
        staff.is_deleted = True
        db.commit()
        assert client.get("/api/rooms", headers=headers).status_code == 401

    def test_stored_role_wins_over_token_claim(self, client, db, users, room_type):
        manager = users[UserRole.MANAGER]
        headers = headers_for(manager)
        manager.role = UserRole.STAFF.value
        db.commit()

        response = client.post("/api/rooms", headers=headers, json={
            "number": "501", "room_type_id": str(room_type.id)})
        assert response.status_code == 403
        assert response.json()["status_code"] == "1006"

    def test_staff_reads_but_cannot_write(self, client, headers, room_type):
        staff = headers[UserRole.STAFF]
        assert client.get("/api/rooms", headers=staff).status_code == 200
        response = client.post("/api/rooms", headers=staff, json={
            "number": "501", "room_type_id": str(room_type.id)})
        assert response.status_code == 403
