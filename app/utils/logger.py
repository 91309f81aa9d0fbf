"""
Logger da aplicação.

Escreve no console e em `logs/app.log` (rotativo) e contabiliza as
mensagens por nível na métrica `log_messages_total`.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler

from app.config.settings import LOG_DIR, LOG_LEVEL
from app.utils.prometheus_metrics import record_log

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class PrometheusLogHandler(logging.Handler):
    """Conta cada registro de log no Prometheus, por nível."""

    def emit(self, record: logging.LogRecord) -> None:
        record_log(record.levelname)


def _configurar_logger() -> logging.Logger:
    log = logging.getLogger("pizzaria")
    if log.handlers:
        return log

    log.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    log.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        arquivo = RotatingFileHandler(
            LOG_DIR / "app.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        arquivo.setFormatter(formatter)
        log.addHandler(arquivo)
    except OSError as e:
        # Diretório somente leitura (ex.: container): segue apenas com console
        log.warning("Não foi possível abrir arquivo de log em %s: %s", LOG_DIR, e)

    log.addHandler(PrometheusLogHandler())
    log.propagate = False
    return log


logger = _configurar_logger()
