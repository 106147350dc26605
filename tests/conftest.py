import os

os.environ.setdefault("APP_ENV", "testing")

import pytest
from fastapi.testclient import TestClient

from config import TestingConfig
from main import create_app
from security import ADMIN, USER, authenticate, login, signup

from helpers import PASSWORD


@pytest.fixture
def config():
    return TestingConfig


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def admin(db, config):
    signup(db, ADMIN, "admin1", PASSWORD, config)
    token = login(db, ADMIN, "admin1", PASSWORD, config)
    return authenticate(db, ADMIN, token, config)


@pytest.fixture
def user(db, config):
    signup(db, USER, "alice1", PASSWORD, config)
    token = login(db, USER, "alice1", PASSWORD, config)
    return authenticate(db, USER, token, config)
