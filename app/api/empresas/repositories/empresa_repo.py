# app/api/empresas/repositories/empresa_repo.py
from typing import Optional, List
from sqlalchemy.orm import Session

from app.api.empresas.models.empresa_model import EmpresaModel


class EmpresaRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_by_ids(self, ids: List[int]) -> List[EmpresaModel]:
        if not ids:
            return []
        return (
            self.db.query(EmpresaModel)
            .filter(EmpresaModel.id.in_(ids))
            .order_by(EmpresaModel.nome.asc())
            .all()
        )

    def create(self, empresa: EmpresaModel) -> EmpresaModel:
        self.db.add(empresa)
        self.db.flush()
        return empresa

    def update(self, empresa: EmpresaModel, data: dict) -> EmpresaModel:
        for key, value in data.items():
            setattr(empresa, key, value)
        self.db.flush()
        return empresa

    def get_empresa_by_id(self, empresa_id: int) -> Optional[EmpresaModel]:
        return (
            self.db.query(EmpresaModel)
            .filter(EmpresaModel.id == empresa_id)
            .first()
        )

    def get_emp_by_slug(self, slug: str) -> Optional[EmpresaModel]:
        return (
            self.db.query(EmpresaModel)
            .filter(EmpresaModel.slug == slug)
            .first()
        )
