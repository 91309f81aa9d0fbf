from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, List

from sqlalchemy import select, or_, update
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_cliente import ClienteModel


class ClienteRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, id: int, empresa_ids: Optional[Iterable[int]] = None) -> Optional[ClienteModel]:
        """Busca cliente por ID; com `empresa_ids`, só dentro dessas empresas."""
        query = self.db.query(ClienteModel).filter(ClienteModel.id == id)
        if empresa_ids is not None:
            query = query.filter(ClienteModel.empresa_id.in_(list(empresa_ids)))
        return query.first()

    def get_da_empresa(self, empresa_id: int, cliente_id: int) -> Optional[ClienteModel]:
        return (
            self.db.query(ClienteModel)
            .filter(
                ClienteModel.id == cliente_id,
                ClienteModel.empresa_id == empresa_id,
            )
            .first()
        )

    def list(
        self,
        empresa_id: int,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ClienteModel]:
        stmt = select(ClienteModel).where(ClienteModel.empresa_id == empresa_id)

        if search is not None:
            s = search.strip()
            if s:
                like = f"%{s}%"
                stmt = stmt.where(
                    or_(
                        ClienteModel.nome.ilike(like),
                        ClienteModel.telefone.ilike(like),
                        ClienteModel.email.ilike(like),
                    )
                )

        # Mais recentes primeiro (id desempata cadastros no mesmo segundo)
        stmt = (
            stmt.order_by(ClienteModel.created_at.desc(), ClienteModel.id.desc())
            .offset(int(skip))
            .limit(int(limit))
        )
        return self.db.execute(stmt).scalars().all()

    def create(self, **data) -> ClienteModel:
        obj = ClienteModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, db_obj: ClienteModel, **data) -> ClienteModel:
        for k, v in data.items():
            setattr(db_obj, k, v)
        self.db.flush()
        return db_obj

    def incrementar_agregados(self, cliente_id: int, valor_total: Decimal, agora: datetime) -> int:
        """
        Soma 1 em `total_pedidos` e `valor_total` em `total_gasto`.

        O incremento é relativo e avaliado pelo banco
        (`total_gasto = total_gasto + :valor`), então criações concorrentes
        para o mesmo cliente não se sobrescrevem.

        Retorna a quantidade de linhas afetadas (0 se o cliente não existe).
        """
        stmt = (
            update(ClienteModel)
            .where(ClienteModel.id == cliente_id)
            .values(
                total_pedidos=ClienteModel.total_pedidos + 1,
                total_gasto=ClienteModel.total_gasto + valor_total,
                updated_at=agora,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount
