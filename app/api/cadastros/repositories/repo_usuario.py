from typing import List, Optional

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from app.api.cadastros.models.association_tables import usuario_empresa
from app.api.cadastros.models.user_model import UserModel


class UsuarioRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.id == id).first()

    def get_by_email(self, email: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter_by(email=email).first()

    def create(self, **data) -> UserModel:
        obj = UserModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    def listar_empresa_ids(self, usuario_id: int) -> List[int]:
        stmt = select(usuario_empresa.c.empresa_id).where(usuario_empresa.c.usuario_id == usuario_id)
        return list(self.db.execute(stmt).scalars().all())

    def vincular_empresa(self, usuario_id: int, empresa_id: int, papel: str = "admin") -> None:
        self.db.execute(
            insert(usuario_empresa).values(
                usuario_id=usuario_id,
                empresa_id=empresa_id,
                papel=papel,
            )
        )
