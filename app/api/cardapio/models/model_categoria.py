from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class CategoriaCardapioModel(Base):
    __tablename__ = "categorias"
    __table_args__ = (
        Index("idx_categorias_empresa_ordem", "empresa_id", "ordem"),
        {"schema": "cardapio"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    empresa_id = Column(Integer, ForeignKey("cadastros.empresas.id", ondelete="CASCADE"), nullable=False)
    empresa = relationship("EmpresaModel", back_populates="categorias")

    nome = Column(String(100), nullable=False)
    descricao = Column(Text, nullable=True)
    ordem = Column(Integer, nullable=False, default=0)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    itens = relationship(
        "ItemCardapioModel",
        back_populates="categoria",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ItemCardapioModel.ordem",
    )
