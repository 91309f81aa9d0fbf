from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.api.cadastros.schemas.schema_cliente import ClienteCreate, ClienteOut, ClienteUpdate
from app.api.cadastros.services.service_cliente import ClienteService
from app.api.pedidos.schemas import PedidoResponse
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.core.admin_dependencies import get_contexto, get_contexto_empresa
from app.core.contexto import ContextoRequisicao
from app.database.db_connection import get_db

router = APIRouter(prefix="/api", tags=["Admin - Cadastros - Clientes"])


def get_cliente_service(db: Session = Depends(get_db)) -> ClienteService:
    return ClienteService(db)


@router.get("/tenants/{empresa_id}/customers", response_model=List[ClienteOut])
def listar_clientes(
    empresa_id: int = Path(..., gt=0),
    search: Optional[str] = Query(None, description="Busca por nome, telefone ou email"),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: ClienteService = Depends(get_cliente_service),
):
    return svc.listar(contexto, empresa_id, search=search)


@router.post(
    "/tenants/{empresa_id}/customers",
    response_model=ClienteOut,
    status_code=status.HTTP_201_CREATED,
)
def criar_cliente(
    payload: ClienteCreate,
    empresa_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: ClienteService = Depends(get_cliente_service),
):
    return svc.criar(contexto, empresa_id, payload)


@router.get("/customers/{cliente_id}", response_model=ClienteOut)
def obter_cliente(
    cliente_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: ClienteService = Depends(get_cliente_service),
):
    return svc.obter(contexto, cliente_id)


@router.put("/customers/{cliente_id}", response_model=ClienteOut)
def atualizar_cliente(
    payload: ClienteUpdate,
    cliente_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: ClienteService = Depends(get_cliente_service),
):
    """Totais (totalOrders/totalSpent) não são editáveis por aqui."""
    return svc.atualizar(contexto, cliente_id, payload)


@router.get("/customers/{cliente_id}/orders", response_model=List[PedidoResponse])
def historico_pedidos_cliente(
    cliente_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.listar_pedidos_cliente(contexto, cliente_id)
