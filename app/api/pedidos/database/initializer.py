"""
Inicializador do domínio Pedidos.
"""
import logging

from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

# Importar models do domínio
from app.api.pedidos.models import PedidoModel  # noqa: F401

logger = logging.getLogger(__name__)


class PedidosInitializer(DomainInitializer):
    """Inicializador do domínio Pedidos (tabela única de pedidos de delivery)."""

    def get_domain_name(self) -> str:
        return "pedidos"

    def get_schema_name(self) -> str:
        return "pedidos"


# Cria e registra a instância do inicializador
_pedidos_initializer = PedidosInitializer()
register_domain(_pedidos_initializer)
