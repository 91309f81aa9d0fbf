from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel


@dataclass
class ResumoPedidos:
    quantidade: int
    faturamento: Decimal
    ticket_medio: Decimal


class RelatorioRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _filtrar_periodo(self, query, empresa_id: int, inicio: Optional[datetime], fim: Optional[datetime]):
        query = query.filter(PedidoModel.empresa_id == empresa_id)
        if inicio is not None:
            query = query.filter(PedidoModel.created_at >= inicio)
        if fim is not None:
            query = query.filter(PedidoModel.created_at <= fim)
        return query

    def resumo_periodo(
        self, empresa_id: int, inicio: Optional[datetime] = None, fim: Optional[datetime] = None
    ) -> ResumoPedidos:
        """Contagem, soma e média de `valor_total` calculadas no banco."""
        query = self.db.query(
            func.count(PedidoModel.id),
            func.coalesce(func.sum(PedidoModel.valor_total), 0),
            func.coalesce(func.avg(PedidoModel.valor_total), 0),
        )
        quantidade, faturamento, media = self._filtrar_periodo(query, empresa_id, inicio, fim).one()

        return ResumoPedidos(
            quantidade=int(quantidade or 0),
            faturamento=Decimal(str(faturamento or 0)),
            ticket_medio=Decimal(str(media or 0)),
        )

    def horarios_entrega(
        self, empresa_id: int, inicio: Optional[datetime] = None, fim: Optional[datetime] = None
    ) -> List[Tuple[datetime, datetime]]:
        """Pares (created_at, entregue_em) dos pedidos já entregues no período."""
        query = self.db.query(PedidoModel.created_at, PedidoModel.entregue_em).filter(
            PedidoModel.entregue_em.isnot(None)
        )
        rows = self._filtrar_periodo(query, empresa_id, inicio, fim).all()
        return [(row[0], row[1]) for row in rows]

    def itens_dos_pedidos(self, empresa_id: int) -> List[list]:
        """Snapshots de itens de todos os pedidos da empresa."""
        rows = self.db.query(PedidoModel.itens).filter(PedidoModel.empresa_id == empresa_id).all()
        return [row[0] or [] for row in rows]
