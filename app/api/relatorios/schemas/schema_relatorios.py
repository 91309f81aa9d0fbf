from decimal import Decimal

from pydantic import Field

from app.api.shared.schemas import ApiModel, Dinheiro


class EstatisticasPedidosResponse(ApiModel):
    total_pedidos: int = Field(0, alias="totalOrders")
    faturamento_total: Dinheiro = Field(Decimal("0.00"), alias="totalRevenue")
    ticket_medio: Dinheiro = Field(Decimal("0.00"), alias="averageOrderValue")
    tempo_medio_entrega_minutos: float = Field(0.0, alias="averageDeliveryTimeMinutes")


class ItemPopularResponse(ApiModel):
    nome: str = Field(..., alias="name")
    quantidade_vendida: int = Field(..., alias="salesCount")
