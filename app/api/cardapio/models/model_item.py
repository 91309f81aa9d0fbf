from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, Index, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ItemCardapioModel(Base):
    __tablename__ = "itens"
    __table_args__ = (
        Index("idx_itens_empresa_ordem", "empresa_id", "ordem"),
        Index("idx_itens_categoria", "categoria_id"),
        {"schema": "cardapio"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    empresa_id = Column(Integer, ForeignKey("cadastros.empresas.id", ondelete="CASCADE"), nullable=False)
    empresa = relationship("EmpresaModel", back_populates="itens_cardapio")

    categoria_id = Column(Integer, ForeignKey("cardapio.categorias.id", ondelete="CASCADE"), nullable=False)
    categoria = relationship("CategoriaCardapioModel", back_populates="itens")

    nome = Column(String(255), nullable=False)
    descricao = Column(Text, nullable=True)
    imagem = Column(String(500), nullable=True)
    # Preço por tamanho, ex.: {"P": "25.00", "M": "30.00", "G": "35.00"} ou {"Único": "15.00"}
    precos = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    disponivel = Column(Boolean, nullable=False, default=True)
    ordem = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
