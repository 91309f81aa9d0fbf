from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.core.exceptions import NotFoundError
from app.utils.database_utils import quantizar
from app.utils.logger import logger


class AgregadoClienteService:
    """
    Mantém `total_pedidos`/`total_gasto` do cliente a partir dos pedidos criados.

    Não abre transação própria: roda dentro da unidade de trabalho de quem
    cria o pedido, de modo que pedido e agregado são gravados (ou desfeitos)
    juntos. Cancelamentos não revertem o agregado.
    """

    def __init__(self, db: Session):
        self.repo = ClienteRepository(db)

    def registrar_pedido_criado(self, cliente_id: int, valor_total: Decimal, agora: datetime) -> None:
        """`agora` é o mesmo horário gravado no pedido (vira `updated_at` do cliente)."""
        valor = quantizar(valor_total)
        afetados = self.repo.incrementar_agregados(cliente_id, valor, agora)
        if not afetados:
            raise NotFoundError("Cliente não encontrado")
        logger.info(f"[Clientes] Agregado atualizado cliente_id={cliente_id} +1 pedido, +{valor}")
