from datetime import date

import pytest

from config import TestConfig
from corpo_libero import create_app
from corpo_libero.extensions import db
from corpo_libero.models import User

TEST_EMAIL = "profe@corpolibero.test"
TEST_PASSWORD = "secreto123"


@pytest.fixture
def app(tmp_path):
    class _TestConfig(TestConfig):
        STORAGE_ROOT = str(tmp_path / "storage")

    app = create_app(_TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def sign_up(client, email=TEST_EMAIL, password=TEST_PASSWORD, display_name="Profe"):
    return client.post(
        "/auth/",
        data={
            "mode": "signup",
            "display_name": display_name,
            "email": email,
            "password": password,
            "confirm_password": password,
        },
    )


@pytest.fixture
def auth_client(client):
    response = sign_up(client)
    assert response.status_code == 302
    return client


@pytest.fixture
def user_id(auth_client):
    user = db.session.query(User).filter_by(email=TEST_EMAIL).one()
    return user.id


@pytest.fixture
def today():
    return date(2026, 1, 20)
