# app/api/empresas/models/empresa_model.py
from sqlalchemy import Column, Integer, String, Boolean, Numeric, Text, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.api.cadastros.models.association_tables import usuario_empresa
from app.config.settings import (
    EMPRESA_DIAS_FUNCIONAMENTO_PADRAO,
    EMPRESA_FORMAS_PAGAMENTO_PADRAO,
    EMPRESA_HORARIO_ABERTURA_PADRAO,
    EMPRESA_HORARIO_FECHAMENTO_PADRAO,
    EMPRESA_PEDIDO_MINIMO_PADRAO,
    EMPRESA_RAIO_ENTREGA_PADRAO,
    EMPRESA_TAXA_ENTREGA_PADRAO,
    EMPRESA_TEMPO_ENTREGA_PADRAO,
)
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed

JSONVariant = JSON().with_variant(JSONB, "postgresql")


class EmpresaModel(Base):
    """Pizzaria (tenant). Dona de cardápio, clientes e pedidos."""
    __tablename__ = "empresas"
    __table_args__ = {"schema": "cadastros"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    telefone = Column(String(20), nullable=True)
    endereco = Column(Text, nullable=True)

    # Configuração de entrega
    taxa_entrega = Column(Numeric(10, 2), nullable=False, default=EMPRESA_TAXA_ENTREGA_PADRAO)
    raio_entrega = Column(Integer, nullable=False, default=EMPRESA_RAIO_ENTREGA_PADRAO)  # km
    pedido_minimo = Column(Numeric(10, 2), nullable=False, default=EMPRESA_PEDIDO_MINIMO_PADRAO)
    tempo_medio_entrega = Column(Integer, nullable=False, default=EMPRESA_TEMPO_ENTREGA_PADRAO)  # minutos

    # Funcionamento: "HH:MM" e lista de dias em inglês (monday..sunday)
    horario_abertura = Column(String(5), nullable=False, default=EMPRESA_HORARIO_ABERTURA_PADRAO)
    horario_fechamento = Column(String(5), nullable=False, default=EMPRESA_HORARIO_FECHAMENTO_PADRAO)
    dias_funcionamento = Column(JSONVariant, nullable=False, default=lambda: list(EMPRESA_DIAS_FUNCIONAMENTO_PADRAO))
    formas_pagamento = Column(JSONVariant, nullable=False, default=lambda: list(EMPRESA_FORMAS_PAGAMENTO_PADRAO))

    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    # Relationships (ON DELETE CASCADE no banco)
    categorias = relationship(
        "CategoriaCardapioModel",
        back_populates="empresa",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    itens_cardapio = relationship(
        "ItemCardapioModel",
        back_populates="empresa",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    clientes = relationship(
        "ClienteModel",
        back_populates="empresa",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    pedidos = relationship(
        "PedidoModel",
        back_populates="empresa",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    usuarios = relationship(
        "UserModel",
        secondary=usuario_empresa,
        back_populates="empresas",
        passive_deletes=True,
    )
