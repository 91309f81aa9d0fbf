"""
Services do bounded context de Pedidos.
"""

from .service_pedido import PedidoService, validar_status

__all__ = [
    "PedidoService",
    "validar_status",
]
