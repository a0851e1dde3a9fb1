from datetime import date
from uuid import uuid4

import pytest

from shared.utils.enums import UserRole

from .conftest import data


@pytest.fixture
def desk(headers):
    return headers[UserRole.RECEPTIONIST]


@pytest.fixture
def reservation(client, desk, guest, room):
    return data(client.post("/api/reservations", headers=desk, json={
        "guest_id": str(guest.id),
        "room_ids": [str(room.id)],
        "check_in_date": date(2024, 2, 10).isoformat(),
        "check_out_date": date(2024, 2, 12).isoformat(),
    }))


def record(client, headers, **payload):
    payload.setdefault("type", "PAYMENT")
    payload.setdefault("amount", 100)
    return client.post("/api/transactions", headers=headers, json=payload)


def paid_amount(client, headers, reservation_id):
    return data(client.get(f"/api/reservations/{reservation_id}", headers=headers))["paid_amount"]


# ============================================================================
# LEDGER ENTRIES
# ============================================================================

class TestRecordTransaction:

    def test_payment_increases_paid_amount(self, client, desk, reservation, hotel, users):
        response = record(client, desk, reservation_id=reservation["id"], amount=80,
                          payment_method="CREDIT_CARD", reference="AUTH-991")
        assert response.status_code == 200

        body = data(response)
        assert body["type"] == "PAYMENT"
        assert body["payment_status"] == "PAID"
        assert body["hotel_id"] == str(hotel.id)
        assert body["reservation_code"] == reservation["code"]
        assert body["processed_by_id"] == str(users[UserRole.RECEPTIONIST].id)
        assert body["processed_by_name"] == "Receptionist Tester"
        assert paid_amount(client, desk, reservation["id"]) == 80.0

    def test_refund_decreases_paid_amount(self, client, desk, reservation):
        record(client, desk, reservation_id=reservation["id"], amount=150)
        record(client, desk, reservation_id=reservation["id"], amount=40, type="REFUND")
        assert paid_amount(client, desk, reservation["id"]) == 110.0

    def test_adjustment_leaves_paid_amount(self, client, desk, reservation):
        response = record(client, desk, reservation_id=reservation["id"], amount=15, type="ADJUSTMENT")
        assert response.status_code == 200
        assert paid_amount(client, desk, reservation["id"]) == 0.0

    def test_default_method_is_cash(self, client, desk, reservation):
        body = data(record(client, desk, reservation_id=reservation["id"]))
        assert body["payment_method"] == "CASH"

    @pytest.mark.parametrize("amount", [0, -10])
    def test_amount_must_be_positive(self, client, desk, reservation, amount):
        response = record(client, desk, reservation_id=reservation["id"], amount=amount)
        assert response.status_code == 400

    def test_unknown_type(self, client, desk, reservation):
        response = record(client, desk, reservation_id=reservation["id"], type="GIFT")
        assert response.status_code == 400

    def test_unknown_reservation(self, client, desk):
        response = record(client, desk, reservation_id=str(uuid4()))
        assert response.status_code == 404

    def test_other_hotel_reservation(self, client, other_headers, reservation):
        response = record(client, other_headers[UserRole.RECEPTIONIST], reservation_id=reservation["id"])
        assert response.status_code == 403

    def test_hotel_level_entry(self, client, desk, hotel):
        body = data(record(client, desk, type="ADJUSTMENT", amount=12.5, description="Petty cash"))
        assert body["reservation_id"] is None
        assert body["hotel_id"] == str(hotel.id)

    def test_super_admin_must_name_hotel(self, client, headers, hotel):
        super_admin = headers[UserRole.SUPER_ADMIN]
        assert record(client, super_admin).status_code == 400
        assert record(client, super_admin, hotel_id=str(hotel.id)).status_code == 200

    def test_staff_cannot_record(self, client, headers, reservation):
        response = record(client, headers[UserRole.STAFF], reservation_id=reservation["id"])
        assert response.status_code == 403


# ============================================================================
# LISTING
# ============================================================================

class TestListTransactions:

    def test_filters_and_scope(self, client, desk, headers, other_headers, reservation):
        record(client, desk, reservation_id=reservation["id"], amount=100)
        record(client, desk, reservation_id=reservation["id"], amount=30, type="REFUND")
        record(client, desk, type="ADJUSTMENT", amount=5)

        everything = data(client.get("/api/transactions", headers=headers[UserRole.STAFF]))
        assert everything["total"] == 3

        refunds = data(client.get("/api/transactions", headers=desk, params={"type": "refund"}))
        assert [t["amount"] for t in refunds["transactions"]] == [30.0]

        linked = data(client.get("/api/transactions", headers=desk,
                                 params={"reservation_id": reservation["id"]}))
        assert linked["total"] == 2

        assert data(client.get("/api/transactions",
                               headers=other_headers[UserRole.MANAGER]))["total"] == 0

    def test_no_update_or_delete_routes(self, client, desk, reservation):
        txn = data(record(client, desk, reservation_id=reservation["id"]))
        assert client.put(f"/api/transactions/{txn['id']}", headers=desk, json={}).status_code in (404, 405)
        assert client.delete(f"/api/transactions/{txn['id']}", headers=desk).status_code in (404, 405)
