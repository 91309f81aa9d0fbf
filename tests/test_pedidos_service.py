from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.api.cadastros.models import ClienteModel
from app.api.pedidos.models import PedidoModel, StatusPedido
from app.api.pedidos.schemas import PedidoCreateRequest
from app.api.pedidos.services.service_pedido import PedidoService
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError, PersistenceError, ValidationError

from tests.conftest import T0, RelogioFixo


def _payload(cliente, itens, endereco, **extra) -> PedidoCreateRequest:
    dados = {
        "customerId": cliente.id,
        "items": itens,
        "paymentMethod": "pix",
        "deliveryAddress": endereco,
    }
    dados.update(extra)
    return PedidoCreateRequest.model_validate(dados)


@pytest.fixture
def itens_cenario_a(item_cardapio, bebida):
    return [
        {"menuItemId": item_cardapio.id, "size": "P", "quantity": 2, "price": "25.00"},
        {"menuItemId": bebida.id, "quantity": 1, "price": "9.00"},
    ]


@pytest.fixture
def svc(db, relogio):
    # Token de número derivado do relógio fixo: mesmo ponto de partida em criações seguidas
    return PedidoService(db, relogio=relogio, token_numero=lambda: int(relogio().timestamp() * 1000))


# ======================================================================
# ============================== CRIAÇÃO ===============================
# ======================================================================
def test_criar_pedido_calcula_totais_e_atualiza_agregado(svc, db, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    pedido = svc.criar_pedido(
        contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega, deliveryFee="5.00")
    )

    assert pedido.subtotal == Decimal("59.00")
    assert pedido.taxa_entrega == Decimal("5.00")
    assert pedido.valor_total == Decimal("64.00")
    assert pedido.status == StatusPedido.PENDENTE.value
    assert pedido.created_at == T0
    assert pedido.preparado_em is None
    assert pedido.entregue_em is None
    assert pedido.numero_pedido.startswith("#")
    assert len(pedido.numero_pedido) == 7

    db.refresh(cliente)
    assert cliente.total_pedidos == 1
    assert cliente.total_gasto == Decimal("64.00")


def test_criar_pedido_guarda_snapshot_dos_itens(svc, db, contexto, empresa, cliente, item_cardapio, itens_cenario_a, endereco_entrega):
    pedido = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))

    # Mudança posterior no cardápio não altera o pedido
    item_cardapio.nome = "Margherita Especial"
    item_cardapio.precos = {"P": "99.00"}
    db.commit()
    db.refresh(pedido)

    primeiro = pedido.itens[0]
    assert primeiro["nome"] == "Pizza Margherita"
    assert primeiro["tamanho"] == "P"
    assert primeiro["quantidade"] == 2
    assert Decimal(primeiro["preco_unitario"]) == Decimal("25.00")
    assert pedido.endereco_entrega["rua"] == "Rua das Flores, 10"


def test_criar_pedido_ignora_totais_enviados_pelo_cliente(svc, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    pedido = svc.criar_pedido(
        contexto,
        empresa.id,
        _payload(cliente, itens_cenario_a, endereco_entrega, deliveryFee="5.00", subtotal="1.00", total="2.00"),
    )

    assert pedido.subtotal == Decimal("59.00")
    assert pedido.valor_total == Decimal("64.00")


def test_taxa_de_entrega_padrao_vem_da_empresa(svc, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    pedido = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))

    assert pedido.taxa_entrega == Decimal("5.00")
    assert pedido.valor_total == pedido.subtotal + pedido.taxa_entrega


def test_nome_do_item_informado_prevalece(svc, contexto, empresa, cliente, item_cardapio, endereco_entrega):
    itens = [{"menuItemId": item_cardapio.id, "name": "Margherita (sem cebola)", "quantity": 1, "price": "25.00"}]
    pedido = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens, endereco_entrega))

    assert pedido.itens[0]["nome"] == "Margherita (sem cebola)"


def test_forma_de_pagamento_nao_aceita(svc, db, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    payload = _payload(cliente, itens_cenario_a, endereco_entrega, paymentMethod="cheque")

    with pytest.raises(ValidationError):
        svc.criar_pedido(contexto, empresa.id, payload)
    assert db.query(PedidoModel).count() == 0


def test_item_indisponivel(svc, db, contexto, empresa, cliente, item_cardapio, itens_cenario_a, endereco_entrega):
    item_cardapio.disponivel = False
    db.commit()

    with pytest.raises(ValidationError):
        svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))


def test_tamanho_inexistente(svc, contexto, empresa, cliente, item_cardapio, endereco_entrega):
    itens = [{"menuItemId": item_cardapio.id, "size": "Gigante", "quantity": 1, "price": "40.00"}]

    with pytest.raises(ValidationError):
        svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens, endereco_entrega))


def test_item_de_outra_empresa_nao_encontrado(svc, contexto, empresa, cliente, endereco_entrega):
    itens = [{"menuItemId": 9999, "quantity": 1, "price": "10.00"}]

    with pytest.raises(NotFoundError):
        svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens, endereco_entrega))


def test_cliente_de_outra_empresa_nao_encontrado(svc, db, contexto, empresa, outra_empresa, itens_cenario_a, endereco_entrega):
    estranho = ClienteModel(empresa_id=outra_empresa.id, nome="João", telefone="11888880000")
    db.add(estranho)
    db.commit()

    with pytest.raises(NotFoundError):
        svc.criar_pedido(contexto, empresa.id, _payload(estranho, itens_cenario_a, endereco_entrega))


def test_empresa_fora_do_contexto(svc, usuario, empresa, cliente, itens_cenario_a, endereco_entrega):
    sem_vinculo = ContextoRequisicao(usuario_id=usuario.id, empresa_ids=frozenset())

    with pytest.raises(NotFoundError):
        svc.criar_pedido(sem_vinculo, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))


def test_falha_no_agregado_desfaz_o_pedido(svc, db, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    def falhar(cliente_id, valor_total, agora):
        raise SQLAlchemyError("conexão perdida")

    svc.agregado_cliente.registrar_pedido_criado = falhar

    with pytest.raises(PersistenceError):
        svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))

    assert db.query(PedidoModel).count() == 0
    db.refresh(cliente)
    assert cliente.total_pedidos == 0
    assert cliente.total_gasto == Decimal("0")


def test_numero_do_pedido_avanca_quando_ja_existe(svc, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    # Mesmo relógio nas duas criações: mesmo token de partida
    primeiro = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))
    segundo = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))

    assert primeiro.numero_pedido != segundo.numero_pedido
    assert int(segundo.numero_pedido[1:]) == (int(primeiro.numero_pedido[1:]) + 1) % 1_000_000


def test_numero_do_pedido_usa_milissegundos_com_relogio_padrao(db, monkeypatch, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    from app.api.pedidos.services import service_pedido

    # 1710108123456 ms desde a época
    monkeypatch.setattr(service_pedido.time, "time_ns", lambda: 1_710_108_123_456_789_000)

    pedido = PedidoService(db).criar_pedido(
        contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega)
    )

    assert pedido.numero_pedido == "#123456"


def test_numeros_com_relogio_padrao_nao_sao_segundos_cheios(db, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    svc_padrao = PedidoService(db)
    numeros = [
        svc_padrao.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega)).numero_pedido
        for _ in range(3)
    ]

    assert len(set(numeros)) == 3
    assert not all(int(n[1:]) % 1000 == 0 for n in numeros)


def test_agregado_do_cliente_usa_o_horario_do_pedido(svc, db, relogio, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    relogio.avancar(hours=2)
    pedido = svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))

    db.refresh(cliente)
    assert pedido.created_at == T0 + timedelta(hours=2)
    assert cliente.updated_at == pedido.created_at


def test_agregados_batem_com_o_historico(svc, db, relogio, contexto, empresa, cliente, item_cardapio, endereco_entrega):
    for qtd in (1, 2, 3):
        relogio.avancar(minutes=1)
        itens = [{"menuItemId": item_cardapio.id, "size": "G", "quantity": qtd, "price": "35.00"}]
        svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens, endereco_entrega, deliveryFee="4.50"))

    pedidos = db.query(PedidoModel).filter(PedidoModel.cliente_id == cliente.id).all()
    db.refresh(cliente)
    assert cliente.total_pedidos == len(pedidos) == 3
    assert cliente.total_gasto == sum((p.valor_total for p in pedidos), Decimal("0"))
    for p in pedidos:
        assert p.valor_total == p.subtotal + p.taxa_entrega


def test_criacoes_intercaladas_nao_perdem_incremento(session_factory, empresa, cliente, contexto, item_cardapio, endereco_entrega):
    sessao_a = session_factory()
    sessao_b = session_factory()
    try:
        # B lê o cliente antes de A gravar; os totais em memória de B ficam velhos
        cliente_em_b = sessao_b.get(ClienteModel, cliente.id)
        assert cliente_em_b.total_gasto == Decimal("0")

        svc_a = PedidoService(sessao_a, relogio=RelogioFixo(T0))
        svc_b = PedidoService(sessao_b, relogio=RelogioFixo(T0 + timedelta(seconds=1)))

        item_10 = [{"menuItemId": item_cardapio.id, "quantity": 1, "price": "10.00"}]
        item_20 = [{"menuItemId": item_cardapio.id, "quantity": 2, "price": "10.00"}]
        svc_a.criar_pedido(contexto, empresa.id, _payload(cliente, item_10, endereco_entrega, deliveryFee="0"))
        svc_b.criar_pedido(contexto, empresa.id, _payload(cliente, item_20, endereco_entrega, deliveryFee="0"))
    finally:
        sessao_a.close()
        sessao_b.close()

    verificacao = session_factory()
    try:
        final = verificacao.get(ClienteModel, cliente.id)
        assert final.total_pedidos == 2
        assert final.total_gasto == Decimal("30.00")
    finally:
        verificacao.close()


# ======================================================================
# =============================== STATUS ===============================
# ======================================================================
@pytest.fixture
def pedido(svc, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    return svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega))


def test_carimbos_de_pronto_e_entregue(svc, relogio, contexto, pedido):
    relogio.avancar(minutes=10)
    pronto = svc.atualizar_status(contexto, pedido.id, "ready")
    assert pronto.status == "ready"
    assert pronto.preparado_em == T0 + timedelta(minutes=10)
    assert pronto.entregue_em is None

    relogio.avancar(minutes=25)
    entregue = svc.atualizar_status(contexto, pedido.id, "delivered")
    assert entregue.status == "delivered"
    assert entregue.preparado_em == T0 + timedelta(minutes=10)
    assert entregue.entregue_em == T0 + timedelta(minutes=35)
    assert entregue.updated_at == T0 + timedelta(minutes=35)


def test_pronto_duas_vezes_mantem_primeiro_carimbo(svc, relogio, contexto, pedido):
    relogio.avancar(minutes=10)
    svc.atualizar_status(contexto, pedido.id, "ready")
    relogio.avancar(minutes=5)
    repetido = svc.atualizar_status(contexto, pedido.id, "ready")

    assert repetido.preparado_em == T0 + timedelta(minutes=10)
    assert repetido.updated_at == T0 + timedelta(minutes=15)


def test_transicoes_nao_sao_restritas(svc, relogio, contexto, pedido):
    relogio.avancar(minutes=40)
    entregue = svc.atualizar_status(contexto, pedido.id, "delivered")
    assert entregue.entregue_em == T0 + timedelta(minutes=40)
    assert entregue.preparado_em is None

    # Volta para "pending" e depois "delivered" de novo: carimbo preservado
    svc.atualizar_status(contexto, pedido.id, "pending")
    relogio.avancar(minutes=5)
    de_novo = svc.atualizar_status(contexto, pedido.id, "delivered")
    assert de_novo.entregue_em == T0 + timedelta(minutes=40)


@pytest.mark.parametrize("status_invalido", ["bogus", "", None, "READY"])
def test_status_invalido_nao_altera_pedido(svc, db, contexto, pedido, status_invalido):
    with pytest.raises(ValidationError):
        svc.atualizar_status(contexto, pedido.id, status_invalido)

    db.refresh(pedido)
    assert pedido.status == "pending"
    assert pedido.updated_at == T0


def test_status_de_pedido_inexistente(svc, contexto):
    with pytest.raises(NotFoundError):
        svc.atualizar_status(contexto, 9999, "ready")


def test_status_de_pedido_de_empresa_sem_vinculo(svc, usuario, pedido):
    sem_vinculo = ContextoRequisicao(usuario_id=usuario.id, empresa_ids=frozenset())

    with pytest.raises(NotFoundError):
        svc.atualizar_status(sem_vinculo, pedido.id, "ready")


def test_cancelar_nao_reverte_agregado(svc, db, contexto, cliente, pedido):
    svc.atualizar_status(contexto, pedido.id, StatusPedido.CANCELADO.value)

    db.refresh(cliente)
    assert cliente.total_pedidos == 1
    assert cliente.total_gasto == Decimal("64.00")


# ======================================================================
# ============================== CONSULTAS =============================
# ======================================================================
@pytest.fixture
def tres_pedidos(svc, relogio, contexto, empresa, cliente, itens_cenario_a, endereco_entrega):
    criados = []
    for _ in range(3):
        criados.append(svc.criar_pedido(contexto, empresa.id, _payload(cliente, itens_cenario_a, endereco_entrega)))
        relogio.avancar(minutes=1)
    return criados


def test_listar_pedidos_mais_recentes_primeiro(svc, contexto, empresa, tres_pedidos):
    ids = [p.id for p in svc.listar_pedidos(contexto, empresa.id)]
    assert ids == [p.id for p in reversed(tres_pedidos)]


def test_listar_pedidos_por_status_e_limite(svc, contexto, empresa, tres_pedidos):
    svc.atualizar_status(contexto, tres_pedidos[0].id, "preparing")
    svc.atualizar_status(contexto, tres_pedidos[2].id, "preparing")

    preparando = svc.listar_pedidos(contexto, empresa.id, status="preparing")
    assert [p.id for p in preparando] == [tres_pedidos[2].id, tres_pedidos[0].id]

    ultimo = svc.listar_pedidos(contexto, empresa.id, limit=1)
    assert [p.id for p in ultimo] == [tres_pedidos[2].id]

    combinados = svc.listar_pedidos(contexto, empresa.id, status="preparing", limit=1)
    assert [p.id for p in combinados] == [tres_pedidos[2].id]


def test_listar_pedidos_status_invalido(svc, contexto, empresa):
    with pytest.raises(ValidationError):
        svc.listar_pedidos(contexto, empresa.id, status="bogus")


def test_historico_do_cliente(svc, contexto, cliente, tres_pedidos):
    historico = svc.listar_pedidos_cliente(contexto, cliente.id)
    assert [p.id for p in historico] == [p.id for p in reversed(tres_pedidos)]


def test_obter_pedido(svc, contexto, pedido):
    assert svc.obter_pedido(contexto, pedido.id).numero_pedido == pedido.numero_pedido
    with pytest.raises(NotFoundError):
        svc.obter_pedido(contexto, pedido.id + 100)
