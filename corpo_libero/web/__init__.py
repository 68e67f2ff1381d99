"""Blueprint web (páginas HTML renderizadas en el servidor)."""
