from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo

from app.config.settings import TIMEZONE

CENTAVOS = Decimal("0.01")


def now_trimmed():
    """Retorna datetime atual no timezone da aplicação, sem microsegundos"""
    tz_sp = ZoneInfo(TIMEZONE)
    return datetime.now(tz_sp).replace(microsecond=0)


def para_horario_local(valor: datetime) -> datetime:
    """Converte para o horário local da aplicação sem tzinfo (formato gravado no banco)."""
    if valor.tzinfo is None:
        return valor
    return valor.astimezone(ZoneInfo(TIMEZONE)).replace(tzinfo=None)


def quantizar(valor) -> Decimal:
    """Arredonda valores monetários para centavos (meia para cima)."""
    if valor is None:
        return Decimal("0.00")
    if not isinstance(valor, Decimal):
        valor = Decimal(str(valor))
    return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)
