"""
Repositories de Cadastros
Centraliza os repositories de usuários e clientes
"""

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.repositories.repo_usuario import UsuarioRepository

__all__ = [
    "ClienteRepository",
    "UsuarioRepository",
]
