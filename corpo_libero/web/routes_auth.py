"""
Rutas de autenticación: ingreso, registro y cierre de sesión.
"""

import logging

from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from corpo_libero.middleware.auth import get_auth_provider

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _safe_next(target: str) -> str:
    # Solo rutas internas
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("main.dashboard")


@auth_bp.route("/", methods=["GET", "POST"])
def login_view():
    if getattr(g, "current_user", None) is not None:
        return redirect(url_for("main.dashboard"))

    active_tab = request.form.get("mode") or request.args.get("tab") or "login"

    if request.method == "POST":
        provider = get_auth_provider()
        try:
            if active_tab == "signup":
                password = request.form.get("password") or ""
                if password != (request.form.get("confirm_password") or ""):
                    raise ValueError("Las contraseñas no coinciden")
                auth_session = provider.sign_up(
                    request.form.get("display_name"),
                    request.form.get("email"),
                    password,
                )
                flash(f"Usuario {auth_session.display_name} registrado exitosamente", "success")
            else:
                provider.sign_in(request.form.get("email"), request.form.get("password"))
                flash("Ingreso exitoso al sistema Corpo Libero", "success")
            return redirect(_safe_next(request.args.get("next", "")))
        except ValueError as exc:
            flash(str(exc), "warning")
        except Exception:
            logger.exception("Error de autenticación")
            flash("Hubo un problema al procesar la solicitud", "danger")

    return render_template("auth/login.html", active_tab=active_tab)


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    get_auth_provider().sign_out()
    flash("Sesión cerrada", "info")
    return redirect(url_for("auth.login_view"))
