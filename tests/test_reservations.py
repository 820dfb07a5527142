from datetime import date, time

import pytest

from restaurant.domain.models import Reservation, Table
from restaurant.domain.reservation_rules import CONFLICT_MESSAGE


def _booking(table_id, at="19:00:00", day="2024-01-01", guests=2):
    return {"table_id": table_id, "reservation_date": day, "reservation_time": at, "number_of_guests": guests}


def _confirmed(db_session, table, user, at, day=date(2024, 1, 1)):
    r = Reservation(
        table_id=table.id, user_id=user.id, reservation_date=day,
        reservation_time=at, number_of_guests=2, status="confirmed",
    )
    db_session.add(r)
    db_session.commit()
    return r


def test_create_reservation_starts_pending(client, customer, customer_headers, table):
    resp = client.post("/reservations", json=_booking(table.id), headers=customer_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Created"
    assert body["data"]["status"] == "pending"
    assert body["data"]["user_id"] == customer.id
    assert body["data"]["reservation_time"] == "19:00:00"


def test_create_requires_token(client, table):
    resp = client.post("/reservations", json=_booking(table.id))
    assert resp.status_code == 401
    assert resp.json()["errors"]["code"] == "UNAUTHORIZED"


def test_conflict_within_two_hours(client, db_session, customer, customer_headers, table):
    _confirmed(db_session, table, customer, time(19, 0))
    resp = client.post("/reservations", json=_booking(table.id, at="20:00:00"), headers=customer_headers)
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["errors"]["code"] == "CONFLICT"
    assert body["errors"]["message"] == CONFLICT_MESSAGE
    assert db_session.query(Reservation).count() == 1


def test_two_hours_apart_is_accepted(client, db_session, customer, customer_headers, table):
    _confirmed(db_session, table, customer, time(19, 0))
    resp = client.post("/reservations", json=_booking(table.id, at="21:00:00"), headers=customer_headers)
    assert resp.status_code == 201


def test_any_confirmed_reservation_blocks(client, db_session, customer, customer_headers, table):
    _confirmed(db_session, table, customer, time(12, 0))
    _confirmed(db_session, table, customer, time(19, 0))
    resp = client.post("/reservations", json=_booking(table.id, at="18:00:00"), headers=customer_headers)
    assert resp.status_code == 409


def test_pending_reservation_does_not_block(client, db_session, customer, customer_headers, table):
    r = _confirmed(db_session, table, customer, time(19, 0))
    r.status = "pending"
    db_session.commit()
    resp = client.post("/reservations", json=_booking(table.id, at="19:30:00"), headers=customer_headers)
    assert resp.status_code == 201


def test_deleted_reservation_does_not_block(client, db_session, customer, customer_headers, table):
    r = _confirmed(db_session, table, customer, time(19, 0))
    r.mark_deleted()
    db_session.commit()
    resp = client.post("/reservations", json=_booking(table.id, at="19:30:00"), headers=customer_headers)
    assert resp.status_code == 201


def test_other_table_does_not_block(client, db_session, customer, customer_headers, table):
    other = Table(number="T2", capacity=2, location="outdoor", status="available")
    db_session.add(other)
    db_session.commit()
    _confirmed(db_session, other, customer, time(19, 0))
    resp = client.post("/reservations", json=_booking(table.id, at="19:00:00"), headers=customer_headers)
    assert resp.status_code == 201


def test_cross_midnight_is_accepted(client, db_session, customer, customer_headers, table):
    _confirmed(db_session, table, customer, time(23, 30))
    resp = client.post(
        "/reservations", json=_booking(table.id, at="00:15:00", day="2024-01-02"), headers=customer_headers
    )
    assert resp.status_code == 201


def test_malformed_date_and_time_are_rejected(client, customer_headers, table):
    resp = client.post("/reservations", json=_booking(table.id, day="01/01/2024"), headers=customer_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"]["code"] == "VALIDATION_ERROR"
    resp = client.post("/reservations", json=_booking(table.id, at="7pm"), headers=customer_headers)
    assert resp.status_code == 400


@pytest.mark.parametrize("day, at", [
    ("2024-6-1", "19:00:00"),
    ("2024-01-1", "19:00:00"),
    ("2024-02-30", "19:00:00"),
    ("2024-01-01", "9:5:3"),
    ("2024-01-01", "19:00"),
    ("2024-01-01", "24:00:00"),
])
def test_unpadded_or_impossible_values_are_rejected(client, customer_headers, table, day, at):
    resp = client.post("/reservations", json=_booking(table.id, at=at, day=day), headers=customer_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"]["code"] == "VALIDATION_ERROR"


def test_unknown_table(client, customer_headers):
    resp = client.post(
        "/reservations", json=_booking("6f1c1b1e-8f5c-4c1e-9a4e-2a7a0d9f0b11"), headers=customer_headers
    )
    assert resp.status_code == 404


def test_update_confirms_without_recheck(client, db_session, customer, customer_headers, table):
    _confirmed(db_session, table, customer, time(19, 0))
    pending = Reservation(
        table_id=table.id, user_id=customer.id, reservation_date=date(2024, 1, 1),
        reservation_time=time(19, 30), number_of_guests=2, status="pending",
    )
    db_session.add(pending)
    db_session.commit()
    resp = client.patch(f"/reservations/{pending.id}", json={"status": "confirmed"}, headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "confirmed"


def test_update_rejects_unknown_status(client, db_session, customer, customer_headers, table):
    r = _confirmed(db_session, table, customer, time(19, 0))
    resp = client.patch(f"/reservations/{r.id}", json={"status": "seated"}, headers=customer_headers)
    assert resp.status_code == 400


def test_delete_and_restore_require_staff(client, db_session, customer, customer_headers, staff_headers, table):
    r = _confirmed(db_session, table, customer, time(19, 0))
    assert client.delete(f"/reservations/{r.id}", headers=customer_headers).status_code == 403

    assert client.delete(f"/reservations/{r.id}", headers=staff_headers).status_code == 200
    assert client.get(f"/reservations/{r.id}").status_code == 404

    resp = client.patch(f"/reservations/{r.id}/restore", headers=staff_headers)
    assert resp.status_code == 200
    assert client.get(f"/reservations/{r.id}").status_code == 200


def test_list_reservations_is_public(client, db_session, customer, table):
    _confirmed(db_session, table, customer, time(19, 0))
    resp = client.get("/reservations")
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 1
