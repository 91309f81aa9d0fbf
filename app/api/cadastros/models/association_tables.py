# app/api/cadastros/models/association_tables.py
from sqlalchemy import Table, Column, Integer, String, ForeignKey, DateTime, PrimaryKeyConstraint

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed

# Tabela de associação usuario-empresa (papel: admin, manager, staff)
usuario_empresa = Table(
    "usuario_empresa",
    Base.metadata,
    Column("usuario_id", Integer, ForeignKey("cadastros.usuarios.id", ondelete="CASCADE"), nullable=False),
    Column("empresa_id", Integer, ForeignKey("cadastros.empresas.id", ondelete="CASCADE"), nullable=False),
    Column("papel", String(50), nullable=False, default="admin"),
    Column("created_at", DateTime, default=now_trimmed, nullable=False),
    PrimaryKeyConstraint("usuario_id", "empresa_id", name="pk_usuario_empresa"),
    schema="cadastros",
)
