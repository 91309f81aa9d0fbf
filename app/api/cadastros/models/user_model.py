from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from app.api.cadastros.models.association_tables import usuario_empresa
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class UserModel(Base):
    """Usuário do painel. Autenticação fica a cargo do serviço externo."""
    __tablename__ = "usuarios"
    __table_args__ = {"schema": "cadastros"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=True, unique=True)
    nome = Column(String(255), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    empresas = relationship(
        "EmpresaModel",
        secondary=usuario_empresa,
        back_populates="usuarios",
        passive_deletes=True,
    )
