from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, constr

from app.api.shared.schemas import ApiModel, Dinheiro, Endereco


# ======================================================================
# ============================ REQUESTS ================================
# ======================================================================
class ItemPedidoRequest(ApiModel):
    """Item enviado pelo cliente. Nome e preço viram snapshot no pedido."""
    item_cardapio_id: int = Field(..., alias="menuItemId", gt=0)
    nome: Optional[constr(min_length=1, max_length=255)] = Field(None, alias="name")
    tamanho: Optional[constr(min_length=1, max_length=50)] = Field(None, alias="size")
    quantidade: int = Field(..., alias="quantity", ge=1, description="Quantidade (mínimo 1)")
    preco_unitario: Decimal = Field(..., alias="price", ge=0, description="Preço unitário no momento do pedido")


class PedidoCreateRequest(ApiModel):
    """
    Corpo de criação de pedido.

    `subtotal` e `total` enviados pelo cliente são apenas conferidos:
    o servidor recalcula ambos a partir dos itens.
    """
    cliente_id: int = Field(..., alias="customerId", gt=0)
    itens: List[ItemPedidoRequest] = Field(..., alias="items", min_length=1)
    forma_pagamento: constr(min_length=1, max_length=50) = Field(..., alias="paymentMethod")
    endereco_entrega: Endereco = Field(..., alias="deliveryAddress")
    observacoes: Optional[str] = Field(None, alias="notes")
    taxa_entrega: Optional[Decimal] = Field(None, alias="deliveryFee", ge=0)
    subtotal: Optional[Decimal] = None
    valor_total: Optional[Decimal] = Field(None, alias="total")


class PedidoStatusPatchRequest(ApiModel):
    # Validado no serviço para responder 400 (e não 422) em status ausente/inválido
    status: Optional[str] = None


# ======================================================================
# ============================ RESPONSES ===============================
# ======================================================================
class ItemPedidoOut(ApiModel):
    item_cardapio_id: int = Field(..., alias="menuItemId")
    nome: str = Field(..., alias="name")
    tamanho: Optional[str] = Field(None, alias="size")
    quantidade: int = Field(..., alias="quantity")
    preco_unitario: Dinheiro = Field(..., alias="price")


class PedidoResponse(ApiModel):
    id: int
    empresa_id: int = Field(..., alias="tenantId")
    cliente_id: int = Field(..., alias="customerId")
    numero_pedido: str = Field(..., alias="orderNumber")
    status: str
    itens: List[ItemPedidoOut] = Field(..., alias="items")
    subtotal: Dinheiro
    taxa_entrega: Dinheiro = Field(..., alias="deliveryFee")
    valor_total: Dinheiro = Field(..., alias="total")
    forma_pagamento: str = Field(..., alias="paymentMethod")
    endereco_entrega: Optional[Endereco] = Field(None, alias="deliveryAddress")
    observacoes: Optional[str] = Field(None, alias="notes")
    preparado_em: Optional[datetime] = Field(None, alias="preparedAt")
    entregue_em: Optional[datetime] = Field(None, alias="deliveredAt")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
