"""
Models de Cadastros
Centraliza os models de usuários, vínculos com empresas e clientes
"""

# Importar todos os models para garantir registro no SQLAlchemy
from app.api.cadastros.models.association_tables import usuario_empresa
from app.api.cadastros.models.user_model import UserModel
from app.api.cadastros.models.model_cliente import ClienteModel

__all__ = [
    "usuario_empresa",
    "UserModel",
    "ClienteModel",
]
