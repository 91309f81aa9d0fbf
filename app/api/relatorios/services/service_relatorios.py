from __future__ import annotations

from collections import Counter
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.api.relatorios.repositories.repository import RelatorioRepository
from app.api.relatorios.schemas.schema_relatorios import (
    EstatisticasPedidosResponse,
    ItemPopularResponse,
)
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError, ValidationError
from app.utils.database_utils import para_horario_local, quantizar
from app.utils.logger import logger

LIMITE_ITENS_POPULARES_PADRAO = 10
LIMITE_ITENS_POPULARES_MAX = 100


def _parse_data(valor: Optional[str], campo: str, fim_do_dia: bool = False) -> Optional[datetime]:
    """
    Aceita data (YYYY-MM-DD) ou data/hora ISO-8601.

    Data sem hora vira o início do dia; com `fim_do_dia`, o último instante
    do dia, para que o limite final seja inclusivo.
    """
    if valor is None or not valor.strip():
        return None
    texto = valor.strip()
    try:
        if len(texto) == 10:
            dia = date.fromisoformat(texto)
            return datetime.combine(dia, time.max if fim_do_dia else time.min)
        if texto.endswith("Z"):
            texto = texto[:-1] + "+00:00"
        return para_horario_local(datetime.fromisoformat(texto))
    except ValueError:
        raise ValidationError(f"{campo} inválido: '{valor}'. Use o formato ISO-8601 (ex.: 2024-01-31)")


def _media_minutos(pares: List[Tuple[datetime, datetime]]) -> float:
    if not pares:
        return 0.0
    total_segundos = sum((entregue - criado).total_seconds() for criado, entregue in pares)
    return round(total_segundos / len(pares) / 60, 2)


class RelatoriosService:
    def __init__(self, db: Session):
        self.repo = RelatorioRepository(db)

    def calcular_estatisticas(
        self,
        contexto: ContextoRequisicao,
        empresa_id: int,
        inicio: Optional[str] = None,
        fim: Optional[str] = None,
    ) -> EstatisticasPedidosResponse:
        """
        Estatísticas dos pedidos da empresa filtrando por `created_at`.

        - só `inicio`: created_at >= inicio
        - `inicio` e `fim`: intervalo fechado [inicio, fim]
        - só `fim`: sem filtro de data (`fim` só vale junto com `inicio`)
        - tempo médio de entrega considera apenas pedidos com `entregue_em`
        - sem pedidos, tudo zero
        """
        if not contexto.pode_acessar(empresa_id):
            raise NotFoundError("Empresa não encontrada")

        dt_inicio = _parse_data(inicio, "startDate")
        dt_fim = _parse_data(fim, "endDate", fim_do_dia=True)
        if dt_inicio is None:
            dt_fim = None
        if dt_inicio and dt_fim and dt_fim < dt_inicio:
            raise ValidationError("endDate não pode ser anterior a startDate")

        resumo = self.repo.resumo_periodo(empresa_id, dt_inicio, dt_fim)
        entregas = self.repo.horarios_entrega(empresa_id, dt_inicio, dt_fim)

        logger.info(
            f"[Relatorios] Estatísticas empresa_id={empresa_id} inicio={dt_inicio} fim={dt_fim} "
            f"pedidos={resumo.quantidade} entregues={len(entregas)}"
        )
        return EstatisticasPedidosResponse(
            total_pedidos=resumo.quantidade,
            faturamento_total=quantizar(resumo.faturamento),
            ticket_medio=quantizar(resumo.ticket_medio),
            tempo_medio_entrega_minutos=_media_minutos(entregas),
        )

    def itens_populares(
        self,
        contexto: ContextoRequisicao,
        empresa_id: int,
        limite: int = LIMITE_ITENS_POPULARES_PADRAO,
    ) -> List[ItemPopularResponse]:
        """
        Soma as quantidades por nome nos snapshots de itens dos pedidos.
        Ordena pela quantidade (desc) e, no empate, pelo nome (asc).
        """
        if not contexto.pode_acessar(empresa_id):
            raise NotFoundError("Empresa não encontrada")
        if limite < 1 or limite > LIMITE_ITENS_POPULARES_MAX:
            raise ValidationError(f"limit deve estar entre 1 e {LIMITE_ITENS_POPULARES_MAX}")

        vendas: Counter = Counter()
        for itens in self.repo.itens_dos_pedidos(empresa_id):
            for item in itens:
                vendas[item["nome"]] += int(item.get("quantidade") or 0)

        ranking = sorted(vendas.items(), key=lambda par: (-par[1], par[0]))[:limite]
        return [ItemPopularResponse(nome=nome, quantidade_vendida=qtd) for nome, qtd in ranking]
