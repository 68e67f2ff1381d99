from typing import Optional

from config import TestConfig
from corpo_libero import create_app
from corpo_libero.extensions import db
from corpo_libero.middleware.auth import AuthSession, SESSION_EXPIRED_MESSAGE
from corpo_libero.models import Profile, User

from .conftest import TEST_EMAIL, TEST_PASSWORD, sign_up


def test_pages_redirect_to_login_without_session(client):
    response = client.get("/cuotas/")

    assert response.status_code == 302
    assert "/auth/" in response.headers["Location"]


def test_api_returns_401_without_session(client):
    response = client.get("/api/dashboard/alerts")

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "Debes iniciar sesión", "payload": None}


def test_sign_up_creates_user_profile_and_session(client):
    response = sign_up(client, display_name="Profe Ana")

    assert response.status_code == 302
    user = db.session.query(User).filter_by(email=TEST_EMAIL).one()
    assert db.session.query(Profile).filter_by(user_id=user.id).one().display_name == "Profe Ana"
    assert client.get("/dashboard").status_code == 200


def test_sign_up_password_mismatch(client):
    response = client.post(
        "/auth/",
        data={"mode": "signup", "display_name": "Ana", "email": "a@b.c",
              "password": "secreto123", "confirm_password": "otro"},
    )

    assert response.status_code == 200
    assert "Las contraseñas no coinciden" in response.get_data(as_text=True)
    assert db.session.query(User).count() == 0


def test_duplicate_sign_up_is_rejected(client):
    sign_up(client)
    client.post("/auth/logout")

    response = sign_up(client)

    assert response.status_code == 200
    assert "Ya existe un usuario" in response.get_data(as_text=True)


def test_sign_in_and_logout(client):
    sign_up(client)
    client.post("/auth/logout")
    assert client.get("/dashboard").status_code == 302

    bad = client.post("/auth/", data={"mode": "login", "email": TEST_EMAIL, "password": "mal"})
    assert "Credenciales inválidas" in bad.get_data(as_text=True)

    ok = client.post("/auth/", data={"mode": "login", "email": TEST_EMAIL.upper(), "password": TEST_PASSWORD})
    assert ok.status_code == 302
    assert client.get("/dashboard").status_code == 200


def test_expired_session_signs_out_and_redirects(auth_client, user_id):
    user = db.session.get(User, user_id)
    user.is_active = False
    db.session.commit()

    response = auth_client.get("/pases/", follow_redirects=True)

    body = response.get_data(as_text=True)
    assert SESSION_EXPIRED_MESSAGE in body
    assert response.request.path == "/auth/"
    with auth_client.session_transaction() as flask_session:
        assert "user_id" not in flask_session


def test_expired_session_on_api_returns_401(auth_client, user_id):
    db.session.get(User, user_id).is_active = False
    db.session.commit()

    response = auth_client.get("/api/students/search?q=lu")

    assert response.status_code == 401
    assert response.get_json()["message"] == SESSION_EXPIRED_MESSAGE


class FixedProvider:
    """Proveedor de prueba: siempre la misma sesión."""

    def __init__(self, user_id: int):
        self.session = AuthSession(user_id=user_id, email="x@y.z", display_name="Fija")
        self.signed_out = False

    def current_session(self) -> Optional[AuthSession]:
        return None if self.signed_out else self.session

    def sign_in(self, email, password):
        return self.session

    def sign_up(self, display_name, email, password):
        return self.session

    def sign_out(self):
        self.signed_out = True


def test_injected_auth_provider(tmp_path):
    class _Config(TestConfig):
        STORAGE_ROOT = str(tmp_path / "storage")

    provider = FixedProvider(user_id=1)
    app = create_app(_Config, auth_provider=provider)
    with app.app_context():
        db.create_all()
        db.session.add(User(id=1, email="x@y.z", password_hash="-"))
        db.session.commit()

        client = app.test_client()
        response = client.get("/dashboard")
        assert response.status_code == 200
        assert "Fija" in response.get_data(as_text=True)

        client.post("/auth/logout")
        assert client.get("/dashboard").status_code == 302

        db.session.remove()
        db.drop_all()
