"""Configuração de timezone do banco de dados."""
import logging
from sqlalchemy import text

from app.config.settings import TIMEZONE
from ..db_connection import engine

logger = logging.getLogger(__name__)


def configurar_timezone():
    """Configura o timezone da sessão do banco com o TIMEZONE da aplicação."""
    try:
        with engine.begin() as conn:
            conn.execute(text("SELECT set_config('timezone', :tz, false)"), {"tz": TIMEZONE})
            # Verifica se o timezone foi configurado corretamente
            result = conn.execute(text("SHOW timezone"))
            timezone_atual = result.scalar()
            logger.info(f"✅ Timezone do banco configurado: {timezone_atual}")
    except Exception as e:
        logger.warning(f"⚠️ Erro ao configurar timezone do banco: {e}")
