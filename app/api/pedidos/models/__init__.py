"""
Models do bounded context de Pedidos.
"""

from .model_pedido import PedidoModel, StatusPedido

__all__ = [
    "PedidoModel",
    "StatusPedido",
]
