"""
Router de pedidos de delivery para o painel da pizzaria.

Criação/listagem ficam sob a empresa (`/api/tenants/{empresa_id}/orders`);
consulta e troca de status usam apenas o ID do pedido (`/api/orders/{pedido_id}`).
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from app.api.pedidos.schemas import (
    PedidoCreateRequest,
    PedidoResponse,
    PedidoStatusPatchRequest,
)
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.core.admin_dependencies import get_contexto, get_contexto_empresa
from app.core.contexto import ContextoRequisicao

router = APIRouter(
    prefix="/api",
    tags=["Admin - Pedidos"],
)


# ======================================================================
# ============================ POR EMPRESA =============================
# ======================================================================
@router.post(
    "/tenants/{empresa_id}/orders",
    response_model=PedidoResponse,
    status_code=status.HTTP_201_CREATED,
)
def criar_pedido(
    payload: PedidoCreateRequest,
    empresa_id: int = Path(..., description="ID da empresa", gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Cria um pedido com status `pending`.

    Subtotal e total são recalculados no servidor a partir dos itens;
    os valores enviados são apenas conferidos.
    """
    return svc.criar_pedido(contexto, empresa_id, payload)


@router.get("/tenants/{empresa_id}/orders", response_model=List[PedidoResponse])
def listar_pedidos(
    empresa_id: int = Path(..., description="ID da empresa", gt=0),
    status_filtro: Optional[str] = Query(None, alias="status", description="Filtra por status"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Quantidade máxima (mais recentes)"),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.listar_pedidos(contexto, empresa_id, status=status_filtro, limit=limit)


# ======================================================================
# ============================== POR PEDIDO ============================
# ======================================================================
@router.get("/orders/{pedido_id}", response_model=PedidoResponse)
def obter_pedido(
    pedido_id: int = Path(..., description="ID do pedido", gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.obter_pedido(contexto, pedido_id)


@router.patch("/orders/{pedido_id}/status", response_model=PedidoResponse)
def atualizar_status_pedido(
    pedido_id: int = Path(..., description="ID do pedido", gt=0),
    payload: Optional[PedidoStatusPatchRequest] = Body(None),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: PedidoService = Depends(get_pedido_service),
):
    """Qualquer status pode suceder qualquer outro; `ready`/`delivered` carimbam o horário uma única vez."""
    novo_status = payload.status if payload else None
    return svc.atualizar_status(contexto, pedido_id, novo_status)
