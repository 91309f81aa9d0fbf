from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.empresas.schemas.schema_empresa import EmpresaCreate, EmpresaResponse, EmpresaUpdate
from app.api.empresas.services.empresa_service import EmpresaService
from app.core.admin_dependencies import forbidden_exception, get_contexto, get_contexto_empresa
from app.core.contexto import ContextoRequisicao
from app.database.db_connection import get_db

router = APIRouter(prefix="/api/tenants", tags=["Admin - Empresas"])


def get_empresa_service(db: Session = Depends(get_db)) -> EmpresaService:
    return EmpresaService(db)


@router.get("", response_model=List[EmpresaResponse])
def listar_empresas(
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: EmpresaService = Depends(get_empresa_service),
):
    """Empresas às quais o usuário está vinculado."""
    return svc.list_empresas(contexto)


@router.get("/{slug}", response_model=EmpresaResponse)
def obter_empresa_por_slug(
    slug: str = Path(..., min_length=1, max_length=100),
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: EmpresaService = Depends(get_empresa_service),
):
    empresa = svc.get_por_slug(slug)
    if not contexto.pode_acessar(empresa.id):
        raise forbidden_exception
    return empresa


@router.post("", response_model=EmpresaResponse, status_code=status.HTTP_201_CREATED)
def criar_empresa(
    payload: EmpresaCreate,
    contexto: ContextoRequisicao = Depends(get_contexto),
    svc: EmpresaService = Depends(get_empresa_service),
):
    """Cria a empresa e vincula o usuário atual como admin. Slug gerado a partir do nome se omitido."""
    return svc.create_empresa(contexto, payload)


@router.put("/{empresa_id}", response_model=EmpresaResponse)
def atualizar_empresa(
    payload: EmpresaUpdate,
    empresa_id: int = Path(..., gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    svc: EmpresaService = Depends(get_empresa_service),
):
    return svc.update_empresa(contexto, empresa_id, payload)
