# app/database/db_connection.py

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from ..config.settings import DATABASE_URL, DB_CONFIG, DB_SSL_MODE, TIMEZONE
from app.core.exceptions import PersistenceError

# Base única para todos os models
Base = declarative_base()

logger = logging.getLogger(__name__)

# Schemas usados pelos models (PostgreSQL). Em bancos sem suporte a schema
# (SQLite em desenvolvimento/testes) eles são traduzidos para o schema padrão.
SCHEMAS = ["cadastros", "cardapio", "pedidos"]
SCHEMA_TRANSLATE_SQLITE = {schema: None for schema in SCHEMAS}


def montar_url() -> str:
    if DATABASE_URL:
        return DATABASE_URL

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(f"Configuração do banco inválida, faltando variáveis: {', '.join(missing)}")

    # Monta a URL de conexão (com SSL opcional via query)
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def criar_engine(url: str) -> Engine:
    """Cria o engine aplicando as particularidades de cada dialeto."""
    if url.startswith("sqlite"):
        eng = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 10},
        )

        @event.listens_for(eng, "connect")
        def _sqlite_pragmas(dbapi_connection, connection_record):
            # SQLite só respeita ON DELETE CASCADE com foreign_keys ligado
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return eng.execution_options(schema_translate_map=SCHEMA_TRANSLATE_SQLITE)

    # Cria o engine com configuração de timezone
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"options": f"-c timezone={TIMEZONE}"},
    )


engine = criar_engine(montar_url())

# Configura o sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transacao(db: Session) -> Iterator[Session]:
    """
    Unidade de trabalho: tudo que for escrito dentro do bloco é confirmado
    junto ou desfeito junto.

        with transacao(db):
            repo.criar(...)
            outro_repo.incrementar(...)

    Erros do SQLAlchemy viram PersistenceError depois do rollback;
    demais exceções (ex.: ValidationError) são propagadas como estão.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Falha de persistência, transação desfeita: %s", e, exc_info=True)
        raise PersistenceError() from e
    except Exception:
        db.rollback()
        raise
