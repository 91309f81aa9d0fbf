from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel, StatusPedido


class PedidoRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Queries -------------
    def get_pedido(
        self,
        pedido_id: int,
        empresa_ids: Optional[Iterable[int]] = None,
    ) -> Optional[PedidoModel]:
        """Busca um pedido por ID. Com `empresa_ids`, só dentro dessas empresas."""
        query = self.db.query(PedidoModel).filter(PedidoModel.id == pedido_id)
        if empresa_ids is not None:
            query = query.filter(PedidoModel.empresa_id.in_(list(empresa_ids)))
        return query.first()

    def numero_existe(self, empresa_id: int, numero_pedido: str) -> bool:
        return (
            self.db.query(PedidoModel.id)
            .filter(
                PedidoModel.empresa_id == empresa_id,
                PedidoModel.numero_pedido == numero_pedido,
            )
            .first()
            is not None
        )

    def listar(
        self,
        empresa_id: int,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[PedidoModel]:
        query = self.db.query(PedidoModel).filter(PedidoModel.empresa_id == empresa_id)
        if status:
            query = query.filter(PedidoModel.status == status)

        query = query.order_by(PedidoModel.created_at.desc(), PedidoModel.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def listar_por_cliente(self, cliente_id: int) -> list[PedidoModel]:
        """Histórico de pedidos de um cliente, mais recentes primeiro."""
        return (
            self.db.query(PedidoModel)
            .filter(PedidoModel.cliente_id == cliente_id)
            .order_by(PedidoModel.created_at.desc(), PedidoModel.id.desc())
            .all()
        )

    # ------------- Escrita -------------
    def criar(self, **data) -> PedidoModel:
        pedido = PedidoModel(**data)
        self.db.add(pedido)
        self.db.flush()
        return pedido

    def atualizar_status(self, pedido_id: int, novo_status: StatusPedido, agora: datetime) -> int:
        """
        Grava o novo status em um único UPDATE.

        `preparado_em`/`entregue_em` usam COALESCE: só são preenchidos se
        ainda estiverem nulos, inclusive com chamadas concorrentes para o
        mesmo pedido. `status` e `updated_at` ficam com a última escrita.
        """
        valores = {
            "status": novo_status.value,
            "updated_at": agora,
        }
        if novo_status == StatusPedido.PRONTO:
            valores["preparado_em"] = func.coalesce(PedidoModel.preparado_em, agora)
        elif novo_status == StatusPedido.ENTREGUE:
            valores["entregue_em"] = func.coalesce(PedidoModel.entregue_em, agora)

        stmt = (
            update(PedidoModel)
            .where(PedidoModel.id == pedido_id)
            .values(**valores)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount
