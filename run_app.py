"""
Arranque rápido de la aplicación:

    python run_app.py

Usa la factory create_app() con la configuración de desarrollo.
"""

from __future__ import annotations

import os

from config import DevConfig
from corpo_libero import create_app


def main() -> None:
    app = create_app(DevConfig)
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))

    app.logger.info("Arranque mediante run_app.py", extra={"component": "launcher"})
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))


if __name__ == "__main__":
    main()
