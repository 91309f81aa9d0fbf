# app/api/pedidos/models/model_pedido.py
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Numeric,
    UniqueConstraint, Index, JSON,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
import enum

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class StatusPedido(enum.Enum):
    """Status possíveis para um pedido de delivery.

    Fluxo usual:
    - pending: Pendente (inicial)
    - preparing: Em preparo
    - ready: Pronto (carimba `preparado_em`)
    - delivering: Saiu para entrega
    - delivered: Entregue (terminal, carimba `entregue_em`)
    - cancelled: Cancelado (terminal)

    A ordem não é imposta: qualquer status pode ser gravado a partir de
    qualquer outro; os carimbos de horário são apenas informativos.
    """
    PENDENTE = "pending"
    PREPARANDO = "preparing"
    PRONTO = "ready"
    SAIU_PARA_ENTREGA = "delivering"
    ENTREGUE = "delivered"
    CANCELADO = "cancelled"

    @classmethod
    def valores(cls) -> list[str]:
        return [s.value for s in cls]


JSONVariant = JSON().with_variant(JSONB, "postgresql")


class PedidoModel(Base):
    __tablename__ = "pedidos"
    __table_args__ = (
        UniqueConstraint("empresa_id", "numero_pedido", name="uq_pedidos_empresa_numero"),
        Index("idx_pedidos_empresa_created", "empresa_id", "created_at"),
        Index("idx_pedidos_empresa_status", "empresa_id", "status"),
        Index("idx_pedidos_cliente", "cliente_id"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    empresa_id = Column(Integer, ForeignKey("cadastros.empresas.id", ondelete="CASCADE"), nullable=False)
    empresa = relationship("EmpresaModel", back_populates="pedidos")

    cliente_id = Column(Integer, ForeignKey("cadastros.clientes.id", ondelete="CASCADE"), nullable=False)
    cliente = relationship("ClienteModel", back_populates="pedidos")

    # Número exibido ao cliente (único por empresa), ex.: "#482913"
    numero_pedido = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=StatusPedido.PENDENTE.value)

    # Snapshot dos itens no momento do pedido:
    # [{"item_cardapio_id", "nome", "tamanho", "quantidade", "preco_unitario"}]
    itens = Column(JSONVariant, nullable=False)

    subtotal = Column(Numeric(10, 2), nullable=False)
    taxa_entrega = Column(Numeric(10, 2), nullable=False, default=0)
    valor_total = Column(Numeric(10, 2), nullable=False)

    forma_pagamento = Column(String(50), nullable=False)
    # Snapshot do endereço (não referencia o cadastro do cliente)
    endereco_entrega = Column(JSONVariant, nullable=True)
    observacoes = Column(Text, nullable=True)

    # Carimbos do ciclo de vida (gravados uma única vez)
    preparado_em = Column(DateTime, nullable=True)
    entregue_em = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, nullable=False)
