from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.api.relatorios.schemas.schema_relatorios import (
    EstatisticasPedidosResponse,
    ItemPopularResponse,
)
from app.api.relatorios.services.service_relatorios import (
    LIMITE_ITENS_POPULARES_MAX,
    LIMITE_ITENS_POPULARES_PADRAO,
    RelatoriosService,
)
from app.core.admin_dependencies import get_contexto_empresa
from app.core.contexto import ContextoRequisicao
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/tenants/{empresa_id}/analytics",
    tags=["Admin - Relatórios"],
)


@router.get("/stats", response_model=EstatisticasPedidosResponse)
def estatisticas_pedidos(
    empresa_id: int = Path(..., description="Identificador da empresa", gt=0),
    inicio: Optional[str] = Query(None, alias="startDate", description="Início (YYYY-MM-DD ou ISO-8601)"),
    fim: Optional[str] = Query(None, alias="endDate", description="Fim, inclusivo (YYYY-MM-DD ou ISO-8601)"),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    db: Session = Depends(get_db),
):
    return RelatoriosService(db).calcular_estatisticas(contexto, empresa_id, inicio=inicio, fim=fim)


@router.get("/popular-items", response_model=List[ItemPopularResponse])
def itens_populares(
    empresa_id: int = Path(..., description="Identificador da empresa", gt=0),
    limite: int = Query(
        LIMITE_ITENS_POPULARES_PADRAO,
        alias="limit",
        ge=1,
        le=LIMITE_ITENS_POPULARES_MAX,
        description="Quantidade de itens no ranking",
    ),
    contexto: ContextoRequisicao = Depends(get_contexto_empresa),
    db: Session = Depends(get_db),
):
    return RelatoriosService(db).itens_populares(contexto, empresa_id, limite=limite)
