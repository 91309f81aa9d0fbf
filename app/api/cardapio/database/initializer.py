"""
Inicializador do domínio Cardápio.
Responsável por criar as tabelas de categorias e itens.
"""
import logging

from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

# Importar models do domínio
from app.api.cardapio.models import CategoriaCardapioModel, ItemCardapioModel  # noqa: F401

logger = logging.getLogger(__name__)


class CardapioInitializer(DomainInitializer):
    """Inicializador do domínio Cardápio."""

    def get_domain_name(self) -> str:
        return "cardapio"

    def get_schema_name(self) -> str:
        return "cardapio"


# Cria e registra a instância do inicializador
_cardapio_initializer = CardapioInitializer()
register_domain(_cardapio_initializer)
