"""
Ponto de entrada da inicialização do banco.

Importar os inicializadores registra cada domínio no registry;
a ordem dos imports é a ordem de criação (cadastros antes de cardapio e pedidos).
"""
from app.api.cadastros.database import initializer as _cadastros_initializer  # noqa: F401
from app.api.cardapio.database import initializer as _cardapio_initializer  # noqa: F401
from app.api.pedidos.database import initializer as _pedidos_initializer  # noqa: F401
from app.database.domain.orchestrator import inicializar_banco

__all__ = ["inicializar_banco"]
