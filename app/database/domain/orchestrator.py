"""
Orquestrador central de inicialização do banco de dados.
Coordena a inicialização de infraestrutura e domínios.
"""
import logging

from ..infrastructure import (
    configurar_timezone,
    criar_schemas,
)
from .registry import get_registry
from ..db_connection import engine

logger = logging.getLogger(__name__)


class DatabaseOrchestrator:
    """
    Orquestrador responsável por coordenar a inicialização completa do banco.

    Fluxo:
    1. Inicializa infraestrutura compartilhada (timezone, schemas), só em PostgreSQL
    2. Inicializa todos os domínios registrados
    """

    def __init__(self):
        self.registry = get_registry()

    def inicializar_infraestrutura(self) -> None:
        if engine.dialect.name != "postgresql":
            logger.info(f"ℹ️ Dialeto '{engine.dialect.name}': schemas e timezone do PostgreSQL ignorados.")
            return

        logger.info("📦 Inicializando infraestrutura compartilhada...")

        try:
            logger.info("  → Configurando timezone...")
            configurar_timezone()

            logger.info("  → Criando schemas...")
            criar_schemas()

            logger.info("✅ Infraestrutura inicializada com sucesso.")
        except Exception as e:
            logger.error(f"❌ Erro ao inicializar infraestrutura: {e}", exc_info=True)
            raise

    def inicializar_dominios(self) -> None:
        initializers = self.registry.get_all()

        if not initializers:
            logger.warning("⚠️ Nenhum domínio registrado para inicialização.")
            return

        logger.info(f"📦 Inicializando {len(initializers)} domínio(s)...")

        for initializer in initializers:
            initializer.initialize()

    def initialize(self) -> None:
        logger.info("🚀 Iniciando processo de inicialização do banco de dados...")

        try:
            self.inicializar_infraestrutura()
            self.inicializar_dominios()
            logger.info("✅ Banco inicializado com sucesso.")
        except Exception as e:
            logger.error(f"❌ Erro durante inicialização do banco: {e}", exc_info=True)
            raise


def inicializar_banco():
    """Função de conveniência chamada no startup da API."""
    orchestrator = DatabaseOrchestrator()
    orchestrator.initialize()
