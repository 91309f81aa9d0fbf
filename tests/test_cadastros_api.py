from app.api.cadastros.repositories.repo_usuario import UsuarioRepository


# ----------------------------------------------------------------------
# Empresas
# ----------------------------------------------------------------------
def test_criar_empresa_gera_slug_e_vincula_criador(client, db, usuario):
    resp = client.post("/api/tenants", json={"name": "Pizzaria Dona Ção & Cia", "deliveryFee": 7.5})

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["slug"] == "pizzaria-dona-cao-e-cia"
    assert body["deliveryFee"] == 7.5
    assert body["paymentMethods"] == ["cash", "credit", "debit", "pix"]
    assert body["isActive"] is True

    assert body["id"] in UsuarioRepository(db).listar_empresa_ids(usuario.id)

    slugs = [e["slug"] for e in client.get("/api/tenants").json()]
    assert "pizzaria-dona-cao-e-cia" in slugs


def test_criar_empresa_com_slug_duplicado_retorna_400(client, empresa):
    resp = client.post("/api/tenants", json={"name": "Outra", "slug": empresa.slug})
    assert resp.status_code == 400


def test_listar_empresas_so_as_vinculadas(client, empresa, outra_empresa):
    ids = [e["id"] for e in client.get("/api/tenants").json()]
    assert ids == [empresa.id]


def test_obter_empresa_por_slug(client, empresa, outra_empresa):
    resp = client.get(f"/api/tenants/{empresa.slug}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Pizzaria Bella Napoli"

    assert client.get(f"/api/tenants/{outra_empresa.slug}").status_code == 403
    assert client.get("/api/tenants/nao-existe").status_code == 404


def test_atualizar_empresa(client, empresa, outra_empresa):
    resp = client.put(
        f"/api/tenants/{empresa.id}",
        json={"deliveryFee": 8, "openTime": "17:30", "paymentMethods": ["pix", "cash", "pix"]},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["deliveryFee"] == 8.0
    assert body["openTime"] == "17:30"
    assert body["paymentMethods"] == ["pix", "cash"]
    assert body["name"] == "Pizzaria Bella Napoli"

    assert client.put(f"/api/tenants/{empresa.id}", json={"openTime": "25:00"}).status_code == 422
    assert client.put(f"/api/tenants/{outra_empresa.id}", json={"deliveryFee": 1}).status_code == 403


# ----------------------------------------------------------------------
# Cardápio
# ----------------------------------------------------------------------
def test_crud_categoria_e_item(client, empresa):
    resp = client.post(
        f"/api/tenants/{empresa.id}/menu/categories",
        json={"name": "Pizzas Doces", "sortOrder": 3},
    )
    assert resp.status_code == 201, resp.text
    categoria = resp.json()
    assert categoria["isActive"] is True

    resp = client.post(
        f"/api/tenants/{empresa.id}/menu/items",
        json={
            "categoryId": categoria["id"],
            "name": "Pizza de Chocolate",
            "prices": {"M": 38, "G": 45.5},
        },
    )
    assert resp.status_code == 201, resp.text
    item = resp.json()
    assert item["prices"] == {"M": 38.0, "G": 45.5}
    assert item["isAvailable"] is True

    resp = client.put(f"/api/menu/items/{item['id']}", json={"isAvailable": False})
    assert resp.status_code == 200
    assert resp.json()["isAvailable"] is False
    assert resp.json()["name"] == "Pizza de Chocolate"

    itens = client.get(
        f"/api/tenants/{empresa.id}/menu/items", params={"categoryId": categoria["id"]}
    ).json()
    assert [i["id"] for i in itens] == [item["id"]]

    resp = client.put(f"/api/menu/categories/{categoria['id']}", json={"name": "Sobremesas"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Sobremesas"

    assert client.delete(f"/api/menu/categories/{categoria['id']}").status_code == 204
    assert client.put(f"/api/menu/items/{item['id']}", json={"name": "x"}).status_code == 404
    assert client.delete(f"/api/menu/items/{item['id']}").status_code == 404


def test_item_sem_precos_retorna_422(client, empresa, categoria):
    resp = client.post(
        f"/api/tenants/{empresa.id}/menu/items",
        json={"categoryId": categoria.id, "name": "Pizza Vazia", "prices": {}},
    )
    assert resp.status_code == 422


def test_item_com_categoria_de_outra_empresa_retorna_400(client, db, empresa, outra_empresa):
    from app.api.cardapio.models import CategoriaCardapioModel

    alheia = CategoriaCardapioModel(empresa_id=outra_empresa.id, nome="Alheia")
    db.add(alheia)
    db.commit()

    resp = client.post(
        f"/api/tenants/{empresa.id}/menu/items",
        json={"categoryId": alheia.id, "name": "Pizza", "prices": {"Único": 20}},
    )
    assert resp.status_code == 400


def test_remover_item(client, item_cardapio):
    assert client.delete(f"/api/menu/items/{item_cardapio.id}").status_code == 204
    assert client.delete(f"/api/menu/items/{item_cardapio.id}").status_code == 404


# ----------------------------------------------------------------------
# Clientes
# ----------------------------------------------------------------------
def test_criar_cliente_comeca_sem_agregados(client, empresa):
    resp = client.post(
        f"/api/tenants/{empresa.id}/customers",
        json={
            "name": "João Lima",
            "phone": "11988887777",
            "email": "",
            "addresses": [{"street": "Av. Brasil, 200", "neighborhood": "Jardins", "city": "São Paulo"}],
            "totalOrders": 50,
            "totalSpent": 999,
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["totalOrders"] == 0
    assert body["totalSpent"] == 0.0
    assert body["email"] is None
    assert body["addresses"][0]["street"] == "Av. Brasil, 200"


def test_buscar_clientes(client, empresa, cliente):
    client.post(f"/api/tenants/{empresa.id}/customers", json={"name": "Carlos Dias", "phone": "11911112222"})

    nomes = [c["name"] for c in client.get(f"/api/tenants/{empresa.id}/customers", params={"search": "souza"}).json()]
    assert nomes == ["Maria Souza"]

    por_telefone = client.get(f"/api/tenants/{empresa.id}/customers", params={"search": "1111"}).json()
    assert [c["name"] for c in por_telefone] == ["Carlos Dias"]

    assert len(client.get(f"/api/tenants/{empresa.id}/customers").json()) == 2


def test_atualizar_cliente_nao_altera_agregados(client, db, cliente):
    resp = client.put(
        f"/api/customers/{cliente.id}",
        json={"phone": "11900000000", "totalOrders": 10, "totalSpent": 500},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["phone"] == "11900000000"
    assert body["name"] == "Maria Souza"
    assert body["totalOrders"] == 0
    assert body["totalSpent"] == 0.0

    db.expire_all()
    assert cliente.telefone == "11900000000"


def test_cliente_de_outra_empresa_retorna_404(client, db, outra_empresa):
    from app.api.cadastros.models import ClienteModel

    alheio = ClienteModel(empresa_id=outra_empresa.id, nome="Fulano", telefone="11000000000")
    db.add(alheio)
    db.commit()

    assert client.get(f"/api/customers/{alheio.id}").status_code == 404
    assert client.put(f"/api/customers/{alheio.id}", json={"name": "x"}).status_code == 404
    assert client.get(f"/api/customers/{alheio.id}/orders").status_code == 404
