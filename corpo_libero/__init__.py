"""
Paquete principal de la aplicación Flask "Corpo Libero".
"""

from typing import Optional

from flask import Flask, jsonify, render_template, request
from config import DevConfig
from .extensions import init_extensions


def create_app(config_class=DevConfig, auth_provider=None) -> Flask:
    """
    Factory de la aplicación.

    `auth_provider` permite inyectar otro proveedor de sesión
    (ver middleware.auth.AuthProvider); por defecto se usa el de sesión Flask.
    """
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="templates",
        static_folder="static",
    )
    app.config.from_object(config_class)
    init_extensions(app)

    from .middleware.auth import init_auth
    init_auth(app, provider=auth_provider)

    from .web.template_filters import register_template_filters
    register_template_filters(app)

    _register_blueprints(app)
    _register_error_handlers(app)

    app.logger.info("Aplicación Flask inicializada.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    # Web
    from .web.routes_auth import auth_bp
    from .web.routes_main import main_bp
    from .web.routes_inscripciones import inscripciones_bp
    from .web.routes_cuotas import cuotas_bp
    from .web.routes_alumnos import alumnos_bp
    from .web.routes_torneos import torneos_bp
    from .web.routes_pases import pases_bp
    from .web.routes_merchandising import merchandising_bp
    from .web.routes_files import files_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(main_bp)
    app.register_blueprint(inscripciones_bp, url_prefix="/inscripciones")
    app.register_blueprint(cuotas_bp, url_prefix="/cuotas")
    app.register_blueprint(alumnos_bp, url_prefix="/alumnos")
    app.register_blueprint(torneos_bp, url_prefix="/torneos")
    app.register_blueprint(pases_bp, url_prefix="/pases")
    app.register_blueprint(merchandising_bp, url_prefix="/merchandising")
    app.register_blueprint(files_bp, url_prefix="/files")

    # API
    from .api import api_dashboard_bp, api_students_bp

    app.register_blueprint(api_dashboard_bp, url_prefix="/api/dashboard")
    app.register_blueprint(api_students_bp, url_prefix="/api/students")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith("/api/"):
            return jsonify(
                {"success": False, "message": "Recurso no encontrado.", "payload": None}
            ), 404
        return render_template("errors/404.html", path=request.path), 404

    @app.errorhandler(413)
    def too_large(error):
        max_size: Optional[int] = app.config.get("MAX_CONTENT_LENGTH")
        app.logger.warning("Upload rechazado por tamaño", extra={"max_size": max_size})
        return render_template("errors/413.html", max_size=max_size), 413
