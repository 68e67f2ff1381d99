"""Middleware de la aplicación: sesión y control de acceso."""
