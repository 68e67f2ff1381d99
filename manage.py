#!/usr/bin/env python3
"""
Script de gestión de la aplicación Corpo Libero.

Uso:
    python manage.py runserver   # Servidor de desarrollo
    python manage.py create-db   # Crea las tablas en la base MySQL
"""

import argparse
import logging
import os

from pymysql.err import OperationalError as MySQLOperationalError
from sqlalchemy.exc import OperationalError as SAOperationalError

from config import DevConfig
from corpo_libero import create_app
from corpo_libero.extensions import db

# Logger de la CLI (fuera del contexto Flask)
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    cli_logger.addHandler(handler)


def _import_all_models() -> None:
    """Registra todos los modelos antes de create_all()."""
    import corpo_libero.models  # noqa: F401


def create_db(app) -> bool:
    """Crea todas las tablas definidas en los modelos. Devuelve True si tuvo éxito."""
    with app.app_context():
        cli_logger.info("Creando tablas en la base de datos...")
        try:
            _import_all_models()
            db.create_all()
        except (SAOperationalError, MySQLOperationalError) as e:
            cli_logger.error("Error de conexión o permisos MySQL: %s", e)
            cli_logger.info(
                "Verifica que MySQL esté activo y que el usuario '%s' tenga acceso a '%s'.",
                app.config.get("DB_USER"),
                app.config.get("DB_NAME"),
            )
            return False

    cli_logger.info("Base de datos creada.")
    return True


def run_server(app) -> None:
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))

    app.logger.info("Servidor en http://%s:%s", host, port)
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Gestión de la aplicación Corpo Libero.")
    parser.add_argument("command", choices=["runserver", "create-db"], help="Comando a ejecutar.")
    args = parser.parse_args(argv)

    app = create_app(DevConfig)

    if args.command == "runserver":
        run_server(app)
        return 0
    return 0 if create_db(app) else 1


if __name__ == "__main__":
    raise SystemExit(main())
