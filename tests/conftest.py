import os

# app 모듈 import 전에 설정해야 엔진/비밀키에 반영됨
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-movie-catalog-suite"

import pytest
from fastapi.testclient import TestClient

from app import models  # noqa: F401  (Base.metadata에 테이블 등록)
from app.db import Base, SessionLocal, engine
from app.main import app

MOVIE = {
    "title": "X",
    "releaseDate": "2020",
    "genre": "Drama",
    "actors": ["A", "B", "C"],
}


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(tables):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def signup(client, username="alice", password="s3cret", name="Alice"):
    return client.post(
        "/signup", json={"name": name, "username": username, "password": password}
    )


@pytest.fixture
def auth_header(client):
    assert signup(client).status_code == 201
    res = client.post("/signin", json={"username": "alice", "password": "s3cret"})
    assert res.status_code == 200
    return {"Authorization": res.json()["token"]}
