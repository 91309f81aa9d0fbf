"""
Schemas compartilhados entre diferentes domínios
"""

from app.api.shared.schemas.schema_shared import (
    ApiModel,
    Dinheiro,
    Endereco,
    PriceMap,
)

__all__ = [
    "ApiModel",
    "Dinheiro",
    "Endereco",
    "PriceMap",
]
