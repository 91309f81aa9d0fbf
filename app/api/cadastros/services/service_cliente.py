from typing import List, Optional

from sqlalchemy.orm import Session

from app.api.cadastros.models.model_cliente import ClienteModel
from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.schemas.schema_cliente import ClienteCreate, ClienteUpdate
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError
from app.database.db_connection import transacao
from app.utils.logger import logger


class ClienteService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ClienteRepository(db)

    def listar(self, contexto: ContextoRequisicao, empresa_id: int, search: Optional[str] = None) -> List[ClienteModel]:
        return self.repo.list(empresa_id, search=search)

    def obter(self, contexto: ContextoRequisicao, cliente_id: int) -> ClienteModel:
        cli = self.repo.get_by_id(cliente_id, empresa_ids=contexto.empresa_ids)
        if not cli:
            raise NotFoundError("Cliente não encontrado")
        return cli

    def criar(self, contexto: ContextoRequisicao, empresa_id: int, data: ClienteCreate) -> ClienteModel:
        dados = data.model_dump()
        with transacao(self.db):
            cli = self.repo.create(empresa_id=empresa_id, **dados)
        self.db.refresh(cli)
        logger.info(f"[Clientes] Cliente criado id={cli.id} empresa_id={empresa_id}")
        return cli

    def atualizar(self, contexto: ContextoRequisicao, cliente_id: int, data: ClienteUpdate) -> ClienteModel:
        cli = self.obter(contexto, cliente_id)
        dados = data.model_dump(exclude_unset=True)
        # nome, telefone e lista de endereços não aceitam null
        for campo in ("nome", "telefone", "enderecos"):
            if campo in dados and dados[campo] is None:
                dados.pop(campo)
        with transacao(self.db):
            self.repo.update(cli, **dados)
        self.db.refresh(cli)
        return cli
