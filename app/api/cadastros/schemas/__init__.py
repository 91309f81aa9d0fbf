"""
Schemas de Cadastros
Centraliza os schemas de CRUD de clientes
"""

from app.api.cadastros.schemas.schema_cliente import ClienteCreate, ClienteOut, ClienteUpdate

__all__ = [
    "ClienteCreate",
    "ClienteOut",
    "ClienteUpdate",
]
