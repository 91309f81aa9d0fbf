from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.api.cardapio.models.model_categoria import CategoriaCardapioModel
from app.api.cardapio.models.model_item import ItemCardapioModel


class CardapioRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Categorias -------------
    def listar_categorias(self, empresa_id: int) -> List[CategoriaCardapioModel]:
        return (
            self.db.query(CategoriaCardapioModel)
            .filter(CategoriaCardapioModel.empresa_id == empresa_id)
            .order_by(CategoriaCardapioModel.ordem.asc(), CategoriaCardapioModel.id.asc())
            .all()
        )

    def get_categoria(
        self,
        categoria_id: int,
        empresa_ids: Optional[Iterable[int]] = None,
    ) -> Optional[CategoriaCardapioModel]:
        query = self.db.query(CategoriaCardapioModel).filter(CategoriaCardapioModel.id == categoria_id)
        if empresa_ids is not None:
            query = query.filter(CategoriaCardapioModel.empresa_id.in_(list(empresa_ids)))
        return query.first()

    def criar_categoria(self, **data) -> CategoriaCardapioModel:
        obj = CategoriaCardapioModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    # ------------- Itens -------------
    def listar_itens(self, empresa_id: int, categoria_id: Optional[int] = None) -> List[ItemCardapioModel]:
        query = self.db.query(ItemCardapioModel).filter(ItemCardapioModel.empresa_id == empresa_id)
        if categoria_id is not None:
            query = query.filter(ItemCardapioModel.categoria_id == categoria_id)
        return query.order_by(ItemCardapioModel.ordem.asc(), ItemCardapioModel.id.asc()).all()

    def get_item(
        self,
        item_id: int,
        empresa_ids: Optional[Iterable[int]] = None,
    ) -> Optional[ItemCardapioModel]:
        query = self.db.query(ItemCardapioModel).filter(ItemCardapioModel.id == item_id)
        if empresa_ids is not None:
            query = query.filter(ItemCardapioModel.empresa_id.in_(list(empresa_ids)))
        return query.first()

    def get_itens_por_ids(self, empresa_id: int, ids: Iterable[int]) -> dict[int, ItemCardapioModel]:
        """Itens da empresa indexados por ID (uma única query)."""
        ids = list(set(ids))
        if not ids:
            return {}
        itens = (
            self.db.query(ItemCardapioModel)
            .filter(
                ItemCardapioModel.empresa_id == empresa_id,
                ItemCardapioModel.id.in_(ids),
            )
            .all()
        )
        return {item.id: item for item in itens}

    def criar_item(self, **data) -> ItemCardapioModel:
        obj = ItemCardapioModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    # ------------- Comuns -------------
    def atualizar(self, obj, data: dict):
        for key, value in data.items():
            setattr(obj, key, value)
        self.db.flush()
        return obj

    def remover(self, obj) -> None:
        self.db.delete(obj)
        self.db.flush()
