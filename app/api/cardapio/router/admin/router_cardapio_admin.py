from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from app.api.cardapio.schemas.schema_cardapio import (
    CategoriaCreate,
    CategoriaOut,
    CategoriaUpdate,
    ItemCardapioCreate,
    ItemCardapioOut,
    ItemCardapioUpdate,
)
from app.api.cardapio.services.service_cardapio import CardapioService
from app.core.admin_dependencies import get_contexto, get_contexto_empresa
from app.core.contexto import ContextoRequisicao
from app.database.db_connection import get_db

router = APIRouter(prefix="/api", tags=["Admin - Cardápio"])


def get_cardapio_service(db: Session = Depends(get_db)) -> CardapioService:
    return CardapioService(db)


# ======================================================================
# ============================ CATEGORIAS ==============================
# ======================================================================
@router.get("/tenants/{empresa_id}/menu/categories", response_model=List[CategoriaOut])
def listar_categorias(
    empresa_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.listar_categorias(contexto, empresa_id)


@router.post(
    "/tenants/{empresa_id}/menu/categories",
    response_model=CategoriaOut,
    status_code=status.HTTP_201_CREATED,
)
def criar_categoria(
    payload: CategoriaCreate,
    empresa_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.criar_categoria(contexto, empresa_id, payload)


@router.put("/menu/categories/{categoria_id}", response_model=CategoriaOut)
def atualizar_categoria(
    payload: CategoriaUpdate,
    categoria_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.atualizar_categoria(contexto, categoria_id, payload)


@router.delete("/menu/categories/{categoria_id}", status_code=status.HTTP_204_NO_CONTENT)
def remover_categoria(
    categoria_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: CardapioService = Depends(get_cardapio_service),
):
    """Remove a categoria e, em cascata, seus itens."""
    svc.remover_categoria(contexto, categoria_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ======================================================================
# ============================== ITENS =================================
# ======================================================================
@router.get("/tenants/{empresa_id}/menu/items", response_model=List[ItemCardapioOut])
def listar_itens(
    empresa_id: int = Path(..., gt=0),
    categoria_id: Optional[int] = Query(None, alias="categoryId", gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.listar_itens(contexto, empresa_id, categoria_id=categoria_id)


@router.post(
    "/tenants/{empresa_id}/menu/items",
    response_model=ItemCardapioOut,
    status_code=status.HTTP_201_CREATED,
)
def criar_item(
    payload: ItemCardapioCreate,
    empresa_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.criar_item(contexto, empresa_id, payload)


@router.put("/menu/items/{item_id}", response_model=ItemCardapioOut)
def atualizar_item(
    payload: ItemCardapioUpdate,
    item_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: CardapioService = Depends(get_cardapio_service),
):
    return svc.atualizar_item(contexto, item_id, payload)


@router.delete("/menu/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remover_item(
    item_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: CardapioService = Depends(get_cardapio_service),
):
    svc.remover_item(contexto, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
