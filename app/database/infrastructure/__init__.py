"""Infraestrutura compartilhada do banco (PostgreSQL)."""
from .schemas import criar_schemas
from .timezone import configurar_timezone

__all__ = [
    "criar_schemas",
    "configurar_timezone",
]
