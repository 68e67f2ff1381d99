"""
Middleware de autenticación.

La sesión la gestiona un proveedor inyectado en create_app() (interfaz
AuthProvider). El proveedor por defecto guarda el id de usuario en la
sesión firmada de Flask y lo valida contra la tabla `users`.

- before_request: carga la sesión actual en g.current_user
- context_processor: expone current_user a los templates Jinja
- login_required: protege páginas y API; una sesión cuyo usuario ya no
  existe o está inactivo se trata como sesión expirada
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional, Protocol

from flask import (
    Flask, current_app, flash, g, jsonify, redirect, request, session, url_for
)
from werkzeug.security import check_password_hash, generate_password_hash

from corpo_libero.models import Profile, User
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SESSION_KEY = "user_id"
SESSION_EXPIRED_MESSAGE = "Tu sesión ha expirado. Por favor, inicia sesión nuevamente."
MIN_PASSWORD_LENGTH = 6


@dataclass
class AuthSession:
    user_id: int
    email: str
    display_name: str


class SessionExpiredError(Exception):
    """La sesión existe pero ya no corresponde a un usuario válido."""


class AuthProvider(Protocol):
    def current_session(self) -> Optional[AuthSession]:
        ...

    def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    def sign_up(self, display_name: str, email: str, password: str) -> AuthSession:
        ...

    def sign_out(self) -> None:
        ...


class SessionAuthProvider:
    """Proveedor por defecto: cuentas en la tabla `users`, id en la sesión Flask."""

    def current_session(self) -> Optional[AuthSession]:
        user_id = session.get(SESSION_KEY)
        if user_id is None:
            return None

        with UnitOfWork() as uow:
            user = uow.users.get_by_id(user_id)
            if user is None or not user.is_active:
                raise SessionExpiredError(f"Usuario {user_id} no disponible")
            return self._to_session(user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        if not email or not password:
            raise ValueError("Por favor completa todos los campos")

        with UnitOfWork() as uow:
            user = uow.users.get_by_email(email)
            if user is None or not user.is_active or not check_password_hash(user.password_hash, password):
                raise ValueError("Credenciales inválidas")
            auth_session = self._to_session(user)

        session.clear()
        session[SESSION_KEY] = auth_session.user_id
        return auth_session

    def sign_up(self, display_name: str, email: str, password: str) -> AuthSession:
        display_name = (display_name or "").strip()
        email = (email or "").strip().lower()
        if not display_name or not email or not password:
            raise ValueError("Por favor completa todos los campos")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres")

        with UnitOfWork() as uow:
            if uow.users.get_by_email(email) is not None:
                raise ValueError("Ya existe un usuario con ese email")

            user = User(email=email, password_hash=generate_password_hash(password))
            uow.users.add(user)
            uow.session.flush()
            uow.profiles.add(Profile(user_id=user.id, display_name=display_name))
            uow.commit()
            auth_session = self._to_session(user)

        session.clear()
        session[SESSION_KEY] = auth_session.user_id
        return auth_session

    def sign_out(self) -> None:
        session.pop(SESSION_KEY, None)

    @staticmethod
    def _to_session(user: User) -> AuthSession:
        display_name = user.profile.display_name if user.profile and user.profile.display_name else user.email
        return AuthSession(user_id=user.id, email=user.email, display_name=display_name)


def get_auth_provider() -> AuthProvider:
    return current_app.extensions["auth_provider"]


def current_user_id() -> int:
    """Id del usuario de la sesión; solo dentro de rutas con login_required."""
    return g.current_user.user_id


def init_auth(app: Flask, provider: Optional[AuthProvider] = None) -> None:
    """
    Registra el proveedor de sesión y los hooks sobre la app Flask.
    """
    app.extensions["auth_provider"] = provider or SessionAuthProvider()

    @app.before_request
    def load_current_session() -> None:
        g.current_user = None
        g.session_expired = False
        if request.endpoint == "static":
            return
        try:
            g.current_user = get_auth_provider().current_session()
        except SessionExpiredError:
            g.session_expired = True

    @app.context_processor
    def inject_user_into_templates():
        return {"current_user": getattr(g, "current_user", None)}


def _unauthorized_json(message: str):
    return jsonify({"success": False, "message": message, "payload": None}), 401


def login_required(view):
    """
    Exige una sesión válida.

    Sin sesión: redirect a /auth (API: 401). Sesión expirada: cierra la
    sesión, avisa al usuario y redirige (API: 401).
    """

    @wraps(view)
    def wrapped(*args, **kwargs):
        is_api = request.path.startswith("/api/")

        if getattr(g, "session_expired", False):
            get_auth_provider().sign_out()
            log_structured_event(
                "session_expired",
                level="warning",
                message="Sesión expirada",
                path=request.path,
            )
            if is_api:
                return _unauthorized_json(SESSION_EXPIRED_MESSAGE)
            flash(SESSION_EXPIRED_MESSAGE, "warning")
            return redirect(url_for("auth.login_view"))

        if getattr(g, "current_user", None) is None:
            if is_api:
                return _unauthorized_json("Debes iniciar sesión")
            return redirect(url_for("auth.login_view", next=request.path))

        return view(*args, **kwargs)

    return wrapped
