"""
Modulo de configuración para la aplicación Flask.
"""

import os
import tempfile
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configuración base, común a todos los entornos."""

    # Clave secreta: en producción debe sobrescribirse con variable de entorno
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- BASE DE DATOS MYSQL -------------------------------------------------
    DB_USER = os.environ.get("DB_USER", "corpolibero")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "corpolibero")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "corpo_libero")

    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- ARCHIVOS (BUCKETS) --------------------------------------------------
    # Cada bucket es una subcarpeta de STORAGE_ROOT
    STORAGE_ROOT = os.environ.get("STORAGE_ROOT", str(BASE_DIR / "storage"))
    MEDICAL_CERTIFICATES_BUCKET = "medical-certificates"
    STUDENT_PHOTOS_BUCKET = "student-photos"

    # Certificados escaneados y fotos: 16 MB alcanzan de sobra
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # --- DASHBOARD -----------------------------------------------------------
    ALERT_REFRESH_SECONDS = int(os.environ.get("ALERT_REFRESH_SECONDS", "300"))
    CERTIFICATE_WARNING_DAYS = 30
    CERTIFICATE_URGENT_DAYS = 7
    # Días de gracia para saldar un pago parcial de torneo
    PARTIAL_PAYMENT_DUE_DAYS = 15

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configuración para entorno de desarrollo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configuración para entorno de producción."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configuración para la suite de tests (SQLite en memoria)."""
    TESTING = True
    DEBUG = False
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    STORAGE_ROOT = os.path.join(tempfile.gettempdir(), "corpo_libero_test_storage")
    LOG_DIR = os.path.join(tempfile.gettempdir(), "corpo_libero_test_logs")
    LOG_LEVEL = "WARNING"
