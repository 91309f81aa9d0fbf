"""
Services de Cadastros
Centraliza os services de clientes e do agregado de pedidos por cliente
"""

from app.api.cadastros.services.service_cliente import ClienteService
from app.api.cadastros.services.service_agregado_cliente import AgregadoClienteService

__all__ = [
    "ClienteService",
    "AgregadoClienteService",
]
