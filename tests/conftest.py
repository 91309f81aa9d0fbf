import os
import tempfile
from datetime import datetime, timedelta
from types import SimpleNamespace

# Configuração mínima antes de importar a aplicação
os.environ.setdefault("SECRET_KEY", "chave-de-teste")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "pizzaria-pedidos-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.api.cadastros.models import ClienteModel, UserModel
from app.api.cadastros.repositories.repo_usuario import UsuarioRepository
from app.api.cardapio.models import CategoriaCardapioModel, ItemCardapioModel
from app.api.empresas.models.empresa_model import EmpresaModel
from app.core.admin_dependencies import get_current_user
from app.core.contexto import ContextoRequisicao
from app.database.db_connection import Base, criar_engine, get_db

T0 = datetime(2024, 3, 10, 19, 0, 0)


class RelogioFixo:
    """Relógio controlado pelos testes (injetado em `PedidoService`)."""

    def __init__(self, agora: datetime = T0):
        self.agora = agora

    def __call__(self) -> datetime:
        return self.agora

    def avancar(self, **kwargs) -> datetime:
        self.agora = self.agora + timedelta(**kwargs)
        return self.agora


@pytest.fixture
def engine(tmp_path):
    eng = criar_engine(f"sqlite:///{tmp_path / 'pizzaria.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def relogio():
    return RelogioFixo()


@pytest.fixture
def usuario(db):
    user = UserModel(email="gerente@pizzaria.com", nome="Gerente")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def empresa(db, usuario):
    emp = EmpresaModel(nome="Pizzaria Bella Napoli", slug="bella-napoli")
    db.add(emp)
    db.flush()
    UsuarioRepository(db).vincular_empresa(usuario.id, emp.id)
    db.commit()
    return emp


@pytest.fixture
def outra_empresa(db):
    emp = EmpresaModel(nome="Pizzaria do Vizinho", slug="do-vizinho")
    db.add(emp)
    db.commit()
    return emp


@pytest.fixture
def contexto(usuario, empresa):
    return ContextoRequisicao(usuario_id=usuario.id, empresa_ids=frozenset({empresa.id}))


@pytest.fixture
def cliente(db, empresa):
    cli = ClienteModel(
        empresa_id=empresa.id,
        nome="Maria Souza",
        telefone="11999990000",
        email="maria@example.com",
        enderecos=[{"rua": "Rua das Flores, 10", "bairro": "Centro", "cidade": "São Paulo", "cep": "01000-000"}],
    )
    db.add(cli)
    db.commit()
    return cli


@pytest.fixture
def categoria(db, empresa):
    cat = CategoriaCardapioModel(empresa_id=empresa.id, nome="Pizzas", ordem=1)
    db.add(cat)
    db.commit()
    return cat


@pytest.fixture
def item_cardapio(db, empresa, categoria):
    item = ItemCardapioModel(
        empresa_id=empresa.id,
        categoria_id=categoria.id,
        nome="Pizza Margherita",
        precos={"P": "25.00", "M": "30.00", "G": "35.00"},
        ordem=1,
    )
    db.add(item)
    db.commit()
    return item


@pytest.fixture
def bebida(db, empresa, categoria):
    item = ItemCardapioModel(
        empresa_id=empresa.id,
        categoria_id=categoria.id,
        nome="Refrigerante 2L",
        precos={"Único": "9.00"},
        ordem=2,
    )
    db.add(item)
    db.commit()
    return item


@pytest.fixture
def endereco_entrega():
    return {"street": "Rua das Flores, 10", "neighborhood": "Centro", "city": "São Paulo", "zipCode": "01000-000"}


@pytest.fixture
def client(session_factory, usuario):
    usuario_atual = SimpleNamespace(id=usuario.id, ativo=True)

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: usuario_atual
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_sem_auth(session_factory):
    """Sem override de usuário: passa pelo `get_current_user` real (JWT)."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
