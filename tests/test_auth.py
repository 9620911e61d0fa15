import logging

import jwt

from app import security
from app.models import User


def _signup(client, **overrides):
    body = {"name": "Alice", "username": "alice", "password": "s3cret"}
    body.update(overrides)
    return client.post("/signup", json=body)


def test_signup_creates_user(client, db):
    res = _signup(client)

    assert res.status_code == 201
    assert res.json() == {"success": True, "msg": "Successfully created new user."}
    user = db.query(User).filter(User.username == "alice").one()
    assert user.name == "Alice"
    # 평문 비밀번호는 저장하지 않음
    assert user.password_hash != "s3cret"
    assert user.password_hash.startswith("$2")


def test_signup_missing_username_or_password(client, db):
    for body in (
        {"name": "Bob", "password": "pw"},
        {"name": "Bob", "username": "bob"},
        {"name": "Bob", "username": "", "password": "pw"},
    ):
        res = client.post("/signup", json=body)
        assert res.status_code == 400
        assert res.json() == {
            "success": False,
            "msg": "Please include both username and password to signup.",
        }

    assert db.query(User).count() == 0


def test_signup_duplicate_username(client, db):
    assert _signup(client).status_code == 201
    original_hash = db.query(User).filter(User.username == "alice").one().password_hash

    res = _signup(client, name="Other", password="different")

    assert res.status_code == 409
    assert res.json() == {
        "success": False,
        "message": "A user with that username already exists.",
    }
    db.expire_all()
    users = db.query(User).filter(User.username == "alice").all()
    assert len(users) == 1
    assert users[0].name == "Alice"
    assert users[0].password_hash == original_hash


def test_signup_rejects_malformed_body(client):
    res = client.post(
        "/signup", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_signin_returns_jwt_token(client):
    _signup(client)

    res = client.post("/signin", json={"username": "alice", "password": "s3cret"})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    scheme, token = body["token"].split(" ")
    assert scheme == "JWT"

    claims = jwt.decode(token, security.SECRET_KEY, algorithms=["HS256"])
    assert claims["username"] == "alice"
    assert isinstance(claims["id"], int)
    assert claims["exp"] - claims["iat"] == 3600


def test_signin_unknown_user(client):
    res = client.post("/signin", json={"username": "nobody", "password": "x"})

    assert res.status_code == 401
    assert res.json() == {"success": False, "msg": "Authentication failed. User not found."}


def test_signin_wrong_password(client):
    _signup(client)

    res = client.post("/signin", json={"username": "alice", "password": "wrong"})

    assert res.status_code == 401
    assert res.json() == {
        "success": False,
        "msg": "Authentication failed. Incorrect password.",
    }


def test_signin_missing_fields_is_unauthorized(client):
    _signup(client)
    assert client.post("/signin", json={}).status_code == 401
    assert client.post("/signin", json={"username": "alice"}).status_code == 401


def test_health_check(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "service": "movie-catalog"}


def test_long_password_signup_and_signin(client):
    password = "p" * 100

    assert _signup(client, password=password).status_code == 201

    res = client.post("/signin", json={"username": "alice", "password": password})
    assert res.status_code == 200

    # 72바이트 이후만 다른 비밀번호도 거부되어야 함
    res = client.post("/signin", json={"username": "alice", "password": "p" * 99 + "q"})
    assert res.status_code == 401


def test_signin_wrong_long_password(client):
    _signup(client)

    res = client.post("/signin", json={"username": "alice", "password": "x" * 100})

    assert res.status_code == 401
    assert res.json()["msg"] == "Authentication failed. Incorrect password."


def test_signin_without_body_is_unauthorized(client):
    res = client.post("/signin")

    assert res.status_code == 401
    assert res.json() == {"success": False, "msg": "Authentication failed. User not found."}


def test_rejected_body_values_are_not_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="movie_catalog"):
        res = client.post("/signup", json={"username": "bob", "password": 987654321})

    assert res.status_code == 400
    assert "Rejected POST /signup" in caplog.text
    assert "987654321" not in caplog.text


def test_form_encoded_signup_is_rejected(client, db):
    res = client.post("/signup", data={"username": "bob", "password": "pw"})

    assert res.status_code == 400
    assert db.query(User).count() == 0
