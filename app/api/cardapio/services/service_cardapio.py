from typing import List, Optional

from sqlalchemy.orm import Session

from app.api.cardapio.models.model_categoria import CategoriaCardapioModel
from app.api.cardapio.models.model_item import ItemCardapioModel
from app.api.cardapio.repositories.repo_cardapio import CardapioRepository
from app.api.cardapio.schemas.schema_cardapio import (
    CategoriaCreate,
    CategoriaUpdate,
    ItemCardapioCreate,
    ItemCardapioUpdate,
)
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError, ValidationError
from app.database.db_connection import transacao
from app.utils.logger import logger

# Colunas NOT NULL que a atualização parcial não pode zerar
CAMPOS_OBRIGATORIOS_CATEGORIA = {"nome", "ordem", "ativo"}
CAMPOS_OBRIGATORIOS_ITEM = {"categoria_id", "nome", "precos", "disponivel", "ordem"}


class CardapioService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CardapioRepository(db)

    # ======================================================================
    # ============================ CATEGORIAS ==============================
    # ======================================================================
    def listar_categorias(self, contexto: ContextoRequisicao, empresa_id: int) -> List[CategoriaCardapioModel]:
        return self.repo.listar_categorias(empresa_id)

    def obter_categoria(self, contexto: ContextoRequisicao, categoria_id: int) -> CategoriaCardapioModel:
        categoria = self.repo.get_categoria(categoria_id, empresa_ids=contexto.empresa_ids)
        if not categoria:
            raise NotFoundError("Categoria não encontrada")
        return categoria

    def criar_categoria(
        self, contexto: ContextoRequisicao, empresa_id: int, data: CategoriaCreate
    ) -> CategoriaCardapioModel:
        with transacao(self.db):
            categoria = self.repo.criar_categoria(empresa_id=empresa_id, **data.model_dump())
        self.db.refresh(categoria)
        return categoria

    def atualizar_categoria(
        self, contexto: ContextoRequisicao, categoria_id: int, data: CategoriaUpdate
    ) -> CategoriaCardapioModel:
        categoria = self.obter_categoria(contexto, categoria_id)
        dados = _sem_nulos(data.model_dump(exclude_unset=True), CAMPOS_OBRIGATORIOS_CATEGORIA)
        with transacao(self.db):
            self.repo.atualizar(categoria, dados)
        self.db.refresh(categoria)
        return categoria

    def remover_categoria(self, contexto: ContextoRequisicao, categoria_id: int) -> None:
        categoria = self.obter_categoria(contexto, categoria_id)
        with transacao(self.db):
            self.repo.remover(categoria)
        logger.info(f"[Cardapio] Categoria removida id={categoria_id} (itens removidos em cascata)")

    # ======================================================================
    # ============================== ITENS =================================
    # ======================================================================
    def listar_itens(
        self, contexto: ContextoRequisicao, empresa_id: int, categoria_id: Optional[int] = None
    ) -> List[ItemCardapioModel]:
        return self.repo.listar_itens(empresa_id, categoria_id=categoria_id)

    def obter_item(self, contexto: ContextoRequisicao, item_id: int) -> ItemCardapioModel:
        item = self.repo.get_item(item_id, empresa_ids=contexto.empresa_ids)
        if not item:
            raise NotFoundError("Item do cardápio não encontrado")
        return item

    def _validar_categoria(self, empresa_id: int, categoria_id: int) -> None:
        if not self.repo.get_categoria(categoria_id, empresa_ids=[empresa_id]):
            raise ValidationError("Categoria não pertence a esta empresa")

    def criar_item(
        self, contexto: ContextoRequisicao, empresa_id: int, data: ItemCardapioCreate
    ) -> ItemCardapioModel:
        self._validar_categoria(empresa_id, data.categoria_id)

        dados = data.model_dump(exclude={"precos"})
        dados["precos"] = data.precos.para_json()
        with transacao(self.db):
            item = self.repo.criar_item(empresa_id=empresa_id, **dados)
        self.db.refresh(item)
        return item

    def atualizar_item(
        self, contexto: ContextoRequisicao, item_id: int, data: ItemCardapioUpdate
    ) -> ItemCardapioModel:
        item = self.obter_item(contexto, item_id)
        dados = _sem_nulos(data.model_dump(exclude_unset=True, exclude={"precos"}), CAMPOS_OBRIGATORIOS_ITEM)
        if data.precos is not None:
            dados["precos"] = data.precos.para_json()
        if "categoria_id" in dados:
            self._validar_categoria(item.empresa_id, dados["categoria_id"])

        with transacao(self.db):
            self.repo.atualizar(item, dados)
        self.db.refresh(item)
        return item

    def remover_item(self, contexto: ContextoRequisicao, item_id: int) -> None:
        item = self.obter_item(contexto, item_id)
        with transacao(self.db):
            self.repo.remover(item)


def _sem_nulos(dados: dict, obrigatorios: set) -> dict:
    return {k: v for k, v in dados.items() if v is not None or k not in obrigatorios}
