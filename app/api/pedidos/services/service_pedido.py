from __future__ import annotations

import time
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.services.service_agregado_cliente import AgregadoClienteService
from app.api.cardapio.repositories.repo_cardapio import CardapioRepository
from app.api.empresas.repositories.empresa_repo import EmpresaRepository
from app.api.pedidos.models.model_pedido import PedidoModel, StatusPedido
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.schemas.schema_pedido import PedidoCreateRequest
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError, ValidationError
from app.database.db_connection import transacao
from app.utils.database_utils import now_trimmed, para_horario_local, quantizar
from app.utils.logger import logger
from app.utils.prometheus_metrics import record_pedido_criado, record_status_pedido

# Tolerância para conferir subtotal/total enviados pelo cliente
TOLERANCIA_CENTAVOS = Decimal("0.01")
DIGITOS_NUMERO_PEDIDO = 6


def epoch_ms() -> int:
    """Instante atual em milissegundos desde a época (sem truncar para segundos)."""
    return time.time_ns() // 1_000_000


def validar_status(valor: Optional[str]) -> StatusPedido:
    """Converte a string recebida em StatusPedido (ValidationError se ausente/desconhecido)."""
    if not valor:
        raise ValidationError("Informe o status do pedido")
    try:
        return StatusPedido(valor)
    except ValueError:
        raise ValidationError(
            f"Status inválido: '{valor}'. Valores aceitos: {', '.join(StatusPedido.valores())}"
        )


class PedidoService:
    """
    Ciclo de vida dos pedidos de delivery.

    - Criação: valida itens contra o cardápio da empresa, recalcula
      subtotal/total no servidor, gera o número do pedido e atualiza os
      agregados do cliente na mesma transação.
    - Status: qualquer transição entre os seis status é aceita; `preparado_em`
      e `entregue_em` são carimbados apenas na primeira vez.

    `relogio` permite fixar o horário (testes); o padrão é `now_trimmed`.
    `token_numero` fornece os milissegundos do número do pedido (o relógio
    padrão não tem fração de segundo).
    """

    def __init__(
        self,
        db: Session,
        relogio: Callable[[], datetime] = now_trimmed,
        token_numero: Callable[[], int] = epoch_ms,
    ):
        self.db = db
        self.relogio = relogio
        self.token_numero = token_numero
        self.repo = PedidoRepository(db)
        self.repo_cliente = ClienteRepository(db)
        self.repo_empresa = EmpresaRepository(db)
        self.repo_cardapio = CardapioRepository(db)
        self.agregado_cliente = AgregadoClienteService(db)

    def _agora(self) -> datetime:
        return para_horario_local(self.relogio())

    # ======================================================================
    # ============================== CRIAÇÃO ===============================
    # ======================================================================
    def criar_pedido(
        self,
        contexto: ContextoRequisicao,
        empresa_id: int,
        payload: PedidoCreateRequest,
    ) -> PedidoModel:
        if not contexto.pode_acessar(empresa_id):
            raise NotFoundError("Empresa não encontrada")
        empresa = self.repo_empresa.get_empresa_by_id(empresa_id)
        if not empresa:
            raise NotFoundError("Empresa não encontrada")

        cliente = self.repo_cliente.get_da_empresa(empresa_id, payload.cliente_id)
        if not cliente:
            raise NotFoundError("Cliente não encontrado")

        formas_aceitas = empresa.formas_pagamento or []
        if payload.forma_pagamento not in formas_aceitas:
            raise ValidationError(
                f"Forma de pagamento '{payload.forma_pagamento}' não aceita. "
                f"Aceitas: {', '.join(formas_aceitas)}"
            )

        itens = self._montar_itens(empresa_id, payload)
        subtotal = sum((quantizar(i["preco_unitario"]) * i["quantidade"] for i in itens), Decimal("0"))
        subtotal = quantizar(subtotal)
        taxa_entrega = quantizar(
            payload.taxa_entrega if payload.taxa_entrega is not None else empresa.taxa_entrega
        )
        valor_total = subtotal + taxa_entrega
        self._conferir_valores_cliente(empresa_id, payload, subtotal, valor_total)

        # JSON: valores monetários como string
        for item in itens:
            item["preco_unitario"] = str(quantizar(item["preco_unitario"]))

        agora = self._agora()
        with transacao(self.db):
            numero = self._gerar_numero_pedido(empresa_id)
            pedido = self.repo.criar(
                empresa_id=empresa_id,
                cliente_id=cliente.id,
                numero_pedido=numero,
                status=StatusPedido.PENDENTE.value,
                itens=itens,
                subtotal=subtotal,
                taxa_entrega=taxa_entrega,
                valor_total=valor_total,
                forma_pagamento=payload.forma_pagamento,
                endereco_entrega=payload.endereco_entrega.model_dump(),
                observacoes=payload.observacoes,
                created_at=agora,
                updated_at=agora,
            )
            self.agregado_cliente.registrar_pedido_criado(cliente.id, valor_total, agora)

        self.db.refresh(pedido)
        record_pedido_criado()
        logger.info(
            f"[Pedidos] Pedido criado id={pedido.id} numero={pedido.numero_pedido} "
            f"empresa_id={empresa_id} cliente_id={cliente.id} total={valor_total}"
        )
        return pedido

    def _montar_itens(self, empresa_id: int, payload: PedidoCreateRequest) -> list[dict]:
        """Snapshot dos itens: nome, tamanho, quantidade e preço no momento do pedido."""
        cardapio = self.repo_cardapio.get_itens_por_ids(
            empresa_id, (i.item_cardapio_id for i in payload.itens)
        )

        itens = []
        for req in payload.itens:
            item_menu = cardapio.get(req.item_cardapio_id)
            if not item_menu:
                raise NotFoundError(f"Item do cardápio {req.item_cardapio_id} não encontrado")
            if not item_menu.disponivel:
                raise ValidationError(f"Item '{item_menu.nome}' indisponível no momento")
            if req.tamanho and req.tamanho not in (item_menu.precos or {}):
                raise ValidationError(f"Tamanho '{req.tamanho}' não existe para '{item_menu.nome}'")

            itens.append({
                "item_cardapio_id": item_menu.id,
                "nome": req.nome or item_menu.nome,
                "tamanho": req.tamanho,
                "quantidade": req.quantidade,
                "preco_unitario": req.preco_unitario,
            })
        return itens

    def _conferir_valores_cliente(
        self,
        empresa_id: int,
        payload: PedidoCreateRequest,
        subtotal: Decimal,
        valor_total: Decimal,
    ) -> None:
        """Valores enviados pelo cliente são ignorados; divergências só vão para o log."""
        if payload.subtotal is not None and abs(payload.subtotal - subtotal) > TOLERANCIA_CENTAVOS:
            logger.warning(
                f"[Pedidos] Subtotal divergente empresa_id={empresa_id} "
                f"enviado={payload.subtotal} calculado={subtotal}"
            )
        if payload.valor_total is not None and abs(payload.valor_total - valor_total) > TOLERANCIA_CENTAVOS:
            logger.warning(
                f"[Pedidos] Total divergente empresa_id={empresa_id} "
                f"enviado={payload.valor_total} calculado={valor_total}"
            )

    def _gerar_numero_pedido(self, empresa_id: int) -> str:
        """
        "#" + últimos 6 dígitos do timestamp em milissegundos.

        Não é único por construção: se o número já existe na empresa, avança
        o token até achar um livre. Duas criações simultâneas ainda podem
        escolher o mesmo número; a constraint única da tabela barra a segunda.
        """
        token = self.token_numero()
        modulo = 10 ** DIGITOS_NUMERO_PEDIDO
        for _ in range(modulo):
            numero = f"#{token % modulo:0{DIGITOS_NUMERO_PEDIDO}d}"
            if not self.repo.numero_existe(empresa_id, numero):
                return numero
            token += 1
        raise ValidationError("Não há números de pedido disponíveis para esta empresa")

    # ======================================================================
    # =============================== STATUS ===============================
    # ======================================================================
    def atualizar_status(
        self,
        contexto: ContextoRequisicao,
        pedido_id: int,
        novo_status: Optional[str],
    ) -> PedidoModel:
        status_novo = validar_status(novo_status)

        pedido = self.repo.get_pedido(pedido_id, empresa_ids=contexto.empresa_ids)
        if not pedido:
            raise NotFoundError("Pedido não encontrado")
        status_anterior = pedido.status

        with transacao(self.db):
            self.repo.atualizar_status(pedido.id, status_novo, self._agora())

        self.db.refresh(pedido)
        record_status_pedido(status_novo.value)
        logger.info(
            f"[Pedidos] Status alterado id={pedido.id} numero={pedido.numero_pedido} "
            f"{status_anterior} -> {status_novo.value}"
        )
        return pedido

    # ======================================================================
    # ============================== CONSULTAS =============================
    # ======================================================================
    def listar_pedidos(
        self,
        contexto: ContextoRequisicao,
        empresa_id: int,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[PedidoModel]:
        """Pedidos da empresa, mais recentes primeiro. `status` e `limit` podem ser combinados."""
        if not contexto.pode_acessar(empresa_id):
            raise NotFoundError("Empresa não encontrada")
        filtro_status = validar_status(status).value if status else None
        return self.repo.listar(empresa_id, status=filtro_status, limit=limit)

    def obter_pedido(self, contexto: ContextoRequisicao, pedido_id: int) -> PedidoModel:
        pedido = self.repo.get_pedido(pedido_id, empresa_ids=contexto.empresa_ids)
        if not pedido:
            raise NotFoundError("Pedido não encontrado")
        return pedido

    def listar_pedidos_cliente(self, contexto: ContextoRequisicao, cliente_id: int) -> list[PedidoModel]:
        cliente = self.repo_cliente.get_by_id(cliente_id, empresa_ids=contexto.empresa_ids)
        if not cliente:
            raise NotFoundError("Cliente não encontrado")
        return self.repo.listar_por_cliente(cliente.id)
