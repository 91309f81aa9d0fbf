"""
Schemas (DTOs) do bounded context de Pedidos.
"""

from .schema_pedido import (
    # Request schemas
    ItemPedidoRequest,
    PedidoCreateRequest,
    PedidoStatusPatchRequest,
    # Response schemas
    ItemPedidoOut,
    PedidoResponse,
)

__all__ = [
    "ItemPedidoRequest",
    "PedidoCreateRequest",
    "PedidoStatusPatchRequest",
    "ItemPedidoOut",
    "PedidoResponse",
]
