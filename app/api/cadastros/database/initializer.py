"""
Inicializador do domínio Cadastros.
Cria as tabelas de empresas, usuários, vínculo usuário-empresa e clientes.
"""
import logging

from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

# Importar models do domínio
from app.api.empresas.models.empresa_model import EmpresaModel  # noqa: F401
from app.api.cadastros.models import UserModel, ClienteModel, usuario_empresa  # noqa: F401

logger = logging.getLogger(__name__)


class CadastrosInitializer(DomainInitializer):
    """Inicializador do domínio Cadastros."""

    def get_domain_name(self) -> str:
        return "cadastros"

    def get_schema_name(self) -> str:
        return "cadastros"


# Cria e registra a instância do inicializador
_cadastros_initializer = CadastrosInitializer()
register_domain(_cadastros_initializer)
