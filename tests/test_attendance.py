import json
import time
from datetime import datetime, timedelta
from types import SimpleNamespace

from api.attendance.attendance_records_model import AttendanceRecord, AttendanceStatus
from api.attendance.attendance_service import (
    AttendanceService,
    purge_expired_tokens,
    qr_code,
    qr_interval,
    summarize_records,
)
from api.attendance.attendance_tokens_model import AttendanceToken
from helpers.token_reaper import reap_expired_tokens
from helpers.token_helper import verify_token

PASSWORD = "letmein"


def _start(client, email):
    resp = client.post("/api/attendance", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _qr(client, token):
    resp = client.get("/api/attendance", params={"token": token})
    assert resp.status_code == 200, resp.text
    return resp.json()["qrData"]


def _scan(client, qr_data, action, password=PASSWORD):
    return client.post(
        "/api/attendance/check",
        json={"adminPassword": password, "qrData": qr_data, "action": action},
    )


# ─── Session tokens ──────────────────────────────────────────────────────────

def test_start_requires_email(client):
    resp = client.post("/api/attendance", json={})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Email is required"}


def test_start_for_unregistered_email(client):
    resp = client.post("/api/attendance", json={"email": "ghost@campus.edu"})
    assert resp.status_code == 404


def test_start_reuses_live_token(client, make_registrant):
    student = make_registrant()

    first = _start(client, student.email)
    second = _start(client, student.email)

    assert first["message"] == "Attendance token created successfully"
    assert second["message"] == "Token already exists"
    assert second["token"] == first["token"]
    assert first["user"]["email"] == student.email
    claims = verify_token(first["token"])
    assert claims["id"] == student.id


def test_qr_payload_shape(client, make_registrant, db_session):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    payload = json.loads(_qr(client, token))

    stored = db_session.query(AttendanceToken).filter_by(email=student.email).one()
    assert payload["email"] == student.email
    assert payload["id"] == student.id
    assert payload["code"] == qr_code(stored.salt, payload["timestamp"])
    assert abs(payload["timestamp"] - qr_interval()) <= 1


def test_qr_requires_valid_token(client):
    assert client.get("/api/attendance").status_code == 400
    resp = client.get("/api/attendance", params={"token": "garbage"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_patch_verifies_token(client, make_registrant):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    resp = client.patch("/api/attendance", json={"token": token})
    assert resp.json() == {"success": True, "message": "Token is valid", "email": student.email}


def test_invalidate_needs_admin(client, make_registrant):
    student = make_registrant()
    _start(client, student.email)

    resp = client.delete("/api/attendance", params={"email": student.email})
    assert resp.status_code == 401


def test_invalidated_token_is_replaced(client, make_registrant):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    resp = client.delete("/api/attendance", params={"email": student.email, "password": PASSWORD})
    assert resp.json()["success"] is True
    assert client.get("/api/attendance", params={"token": token}).status_code == 401

    fresh = _start(client, student.email)
    assert fresh["message"] == "Attendance token created successfully"
    assert fresh["token"] != token


def test_invalidate_unknown_email(client):
    resp = client.delete("/api/attendance", params={"email": "ghost@campus.edu", "password": PASSWORD})
    assert resp.status_code == 404


def test_purge_expired_tokens(db_session, make_registrant, database):
    student = make_registrant()
    token = AttendanceToken(email=student.email, test_user_id=student.id, token="t", salt="s")
    db_session.add(token)
    db_session.commit()

    assert purge_expired_tokens(db_session) == 0

    token.created_at = datetime.now() - timedelta(hours=13)
    db_session.commit()
    assert reap_expired_tokens(database) == 1
    assert db_session.query(AttendanceToken).count() == 0


# ─── Check-in / check-out ────────────────────────────────────────────────────

def test_check_in_then_out(client, make_registrant, db_session):
    student = make_registrant(name="Meera")
    token = _start(client, student.email)["token"]

    resp = _scan(client, _qr(client, token), "check-in")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Check-in recorded successfully"
    assert body["data"]["name"] == "Meera"

    dup = _scan(client, _qr(client, token), "check-in")
    assert dup.status_code == 409

    out = _scan(client, _qr(client, token), "check-out")
    assert out.status_code == 200, out.text
    data = out.json()["data"]
    assert data["duration"] == 0
    assert data["status"] == "half-day"

    again = _scan(client, _qr(client, token), "check-out")
    assert again.status_code == 409

    db_session.expire_all()
    record = db_session.query(AttendanceRecord).one()
    assert record.status == AttendanceStatus.half_day


def test_long_day_stays_present(client, make_registrant, make_record, db_session):
    student = make_registrant()
    make_record(student, check_in=datetime.now() - timedelta(hours=5))
    token = _start(client, student.email)["token"]

    out = _scan(client, _qr(client, token), "check-out")
    assert out.status_code == 200, out.text
    assert out.json()["data"]["status"] == "present"
    assert out.json()["data"]["duration"] >= 300


def test_check_out_without_check_in(client, make_registrant):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    resp = _scan(client, _qr(client, token), "check-out")
    assert resp.status_code == 404


def test_scan_needs_admin_password(client, make_registrant):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    resp = _scan(client, _qr(client, token), "check-in", password="nope")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid admin password"


def test_scan_rejects_bad_input(client, make_registrant):
    student = make_registrant()
    token = _start(client, student.email)["token"]
    qr = _qr(client, token)

    assert _scan(client, qr, "teleport").status_code == 400
    assert _scan(client, "{not json", "check-in").json()["message"] == "Invalid QR data format"
    assert _scan(client, json.dumps({"email": student.email}), "check-in").json()["message"] == "Invalid QR data content"

    tampered = json.loads(qr)
    tampered["code"] = "0" * 64
    resp = _scan(client, json.dumps(tampered), "check-in")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid QR code"


def test_stale_qr_rejected(client, make_registrant, db_session):
    student = make_registrant()
    token = _start(client, student.email)["token"]

    stale = AttendanceService(db_session).current_qr(token, epoch_seconds=time.time() - 60)
    resp = _scan(client, stale, "check-in")
    assert resp.status_code == 400
    assert resp.json()["message"] == "QR code has expired. Please refresh."


# ─── Record listing ──────────────────────────────────────────────────────────

def test_list_records_with_stats(client, make_registrant, make_record):
    a = make_registrant(name="A")
    b = make_registrant(name="B")
    make_record(a, status=AttendanceStatus.present)
    make_record(b, status=AttendanceStatus.half_day)
    make_record(a, day=datetime.now() - timedelta(days=3), status=AttendanceStatus.absent)

    resp = client.get("/api/attendance/check", params={"password": PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 3
    assert body["stats"]["totalDays"] == 3
    assert body["stats"]["attendancePercentage"] == "50.00"

    only_a = client.get("/api/attendance/check", params={"password": PASSWORD, "email": a.email}).json()
    assert {r["email"] for r in only_a["data"]} == {a.email}
    assert only_a["data"][0]["student"]["name"] == "A"

    today = datetime.now().date().isoformat()
    todays = client.get(
        "/api/attendance/check",
        params={"password": PASSWORD, "startDate": today, "endDate": today},
    ).json()
    assert len(todays["data"]) == 2


def test_list_records_bad_date(client):
    resp = client.get("/api/attendance/check", params={"password": PASSWORD, "startDate": "yesterday-ish"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid date format"


def test_summarize_records():
    records = [SimpleNamespace(status=s) for s in (
        AttendanceStatus.present,
        AttendanceStatus.present,
        AttendanceStatus.half_day,
        AttendanceStatus.absent,
    )]
    assert summarize_records(records) == {
        "totalDays": 4,
        "presentDays": 2,
        "halfDays": 1,
        "absentDays": 1,
        "attendancePercentage": "62.50",
    }
    assert summarize_records([])["attendancePercentage"] == "0"


def test_session_start_without_body(client):
    resp = client.post("/api/attendance")
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Email is required"}
