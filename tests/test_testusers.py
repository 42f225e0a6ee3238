from api.testusers.testusers_model import Registrant
from helpers.token_helper import verify_token

SIGNUP = {
    "name": "Asha Rao",
    "email": "asha@campus.edu",
    "regno": "21CSE001",
    "phone": "9876543210",
    "branch": "CSE",
    "campus": "pkd",
}


def test_missing_fields_answer_200_and_create_nothing(client, db_session):
    body = dict(SIGNUP, regno="")
    resp = client.post("/api/testusers", json=body)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Please fill all the fields", "success": False}
    assert db_session.query(Registrant).count() == 0


def test_new_registrant_is_created_with_token(client, db_session):
    resp = client.post("/api/testusers", json=SIGNUP)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    assert verify_token(body["token"])["email"] == "asha@campus.edu"
    assert db_session.query(Registrant).filter_by(email="asha@campus.edu").count() == 1


def test_existing_registrant_gets_fresh_token(client, db_session):
    first = client.post("/api/testusers", json=SIGNUP).json()
    second = client.post("/api/testusers", json=SIGNUP).json()

    assert second["message"] == "User already exists"
    assert second["success"] is True
    assert second["token"] != first["token"]
    assert db_session.query(Registrant).count() == 1


def test_numeric_phone_is_accepted(client, db_session):
    resp = client.post("/api/testusers", json=dict(SIGNUP, phone=9876543210))

    assert resp.json()["success"] is True
    assert db_session.query(Registrant).one().phone == "9876543210"


def test_empty_body_is_a_missing_fields_answer(client, db_session):
    resp = client.post("/api/testusers")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Please fill all the fields", "success": False}
    assert db_session.query(Registrant).count() == 0


def test_malformed_json_body(client):
    resp = client.post(
        "/api/testusers",
        content=b'{"name": ',
        headers={"content-type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid JSON body"}
