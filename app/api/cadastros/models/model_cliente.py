from sqlalchemy import Column, String, DateTime, Index, Integer, Numeric, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ClienteModel(Base):
    __tablename__ = "clientes"
    __table_args__ = (
        Index("idx_clientes_empresa", "empresa_id"),
        Index("idx_clientes_empresa_telefone", "empresa_id", "telefone"),
        {"schema": "cadastros"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    empresa_id = Column(Integer, ForeignKey("cadastros.empresas.id", ondelete="CASCADE"), nullable=False)
    empresa = relationship("EmpresaModel", back_populates="clientes")

    nome = Column(String(255), nullable=False)
    telefone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    # Lista ordenada de endereços; o primeiro é o principal
    enderecos = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)

    # Agregados mantidos só pela criação de pedidos (incremento relativo no banco)
    total_pedidos = Column(Integer, nullable=False, default=0)
    total_gasto = Column(Numeric(10, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    pedidos = relationship(
        "PedidoModel",
        back_populates="cliente",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
