def _login(client, email="ravi@campus.edu", password="s3cret-pass"):
    client.post("/api/auth/register", json={"name": "Ravi", "email": email, "password": password})
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp


def test_register_login_and_me(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Ravi", "email": "ravi@campus.edu", "password": "s3cret-pass"},
    )
    assert resp.status_code == 201
    assert "password" not in resp.json()["user"]

    dup = client.post(
        "/api/auth/register",
        json={"name": "Ravi", "email": "ravi@campus.edu", "password": "s3cret-pass"},
    )
    assert dup.status_code == 409

    bad = client.post("/api/auth/login", json={"email": "ravi@campus.edu", "password": "wrong-pass"})
    assert bad.status_code == 401
    assert bad.json() == {"success": False, "message": "Email or password incorrect"}

    login = client.post("/api/auth/login", json={"email": "ravi@campus.edu", "password": "s3cret-pass"})
    assert login.json()["success"] is True
    assert "token=" in login.headers["set-cookie"]

    me = client.get("/api/auth/me").json()
    assert me["isAuth"] is True
    assert me["user"]["email"] == "ravi@campus.edu"
    assert me["event"] is None


def test_register_rejects_bad_email(client):
    resp = client.post("/api/auth/register", json={"email": "nope", "password": "s3cret-pass"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_me_without_cookie(client):
    assert client.get("/api/auth/me").json() == {"isAuth": False, "error": "No token found"}


def test_me_with_bad_cookie(client):
    client.cookies.set("token", "garbage")
    assert client.get("/api/auth/me").json() == {"isAuth": False, "error": "Error verifying user"}


def test_logout_clears_cookie(client):
    _login(client)
    resp = client.post("/api/auth/logout")
    assert resp.json()["success"] is True
    assert client.get("/api/auth/me").json()["isAuth"] is False


def test_event_requires_authentication(client):
    resp = client.post("/api/event", json={"eventid": "e1", "eventname": "zenetrone"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "User not authenticated. UnAuthorized access", "success": False}


def test_event_registration_flow(client):
    _login(client)

    missing = client.post("/api/event", json={"eventid": "e1"}).json()
    assert missing["success"] is False

    created = client.post("/api/event", json={"eventid": "e1", "eventname": "zenetrone"}).json()
    assert created["success"] is True
    assert created["ticketid"].endswith("DSW")
    assert len(created["ticketid"]) == 9

    again = client.post("/api/event", json={"eventid": "e1", "eventname": "zenetrone"}).json()
    assert again == {"message": "User already registered for the event", "success": False}

    me = client.get("/api/auth/me").json()
    assert me["event"]["ticketid"] == created["ticketid"]
    assert me["event"]["iszentrone"] is True


def test_userdata_inlines_user(client):
    _login(client)
    client.post("/api/event", json={"eventid": "e9", "eventname": "hackathon"})

    resp = client.get("/api/userdata")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == 200
    assert body["length"] == 1
    row = body["data"][0]
    assert row["userid"]["email"] == "ravi@campus.edu"
    assert "password" not in row["userid"]
    assert row["iszentrone"] is False


def test_userdata_when_store_unreachable(broken_client):
    resp = broken_client.get("/api/userdata")
    assert resp.status_code == 500
    assert resp.json() == {
        "status": 500,
        "message": "Something went wrong please try again after sometime",
    }


def test_claim_lookup(client):
    assert client.get("/api/claim").json()["success"] is False
    assert client.get("/api/claim", params={"id": ""}).json()["success"] is False
    assert client.get("/api/claim", params={"id": "ab12cdDSW"}).json() == {"success": True, "id": "ab12cdDSW"}


def test_claim_post_not_available(client):
    resp = client.post("/api/claim", json={"id": "ab12cdDSW"})
    assert resp.status_code == 501
    assert resp.json() == {"success": False, "message": "Ticket claiming is not available"}


def test_event_without_body(client):
    _login(client)
    resp = client.post("/api/event")
    assert resp.status_code == 200
    assert resp.json()["success"] is False
