from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Literal

from pydantic import Field, field_validator, constr

from app.api.shared.schemas import ApiModel, Dinheiro

DiaSemana = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
Horario = constr(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class EmpresaBase(ApiModel):
    telefone: Optional[constr(max_length=20)] = Field(None, alias="phone")
    endereco: Optional[str] = Field(None, alias="address")
    taxa_entrega: Optional[Decimal] = Field(None, alias="deliveryFee", ge=0)
    raio_entrega: Optional[int] = Field(None, alias="deliveryRadius", ge=0)
    pedido_minimo: Optional[Decimal] = Field(None, alias="minOrderValue", ge=0)
    tempo_medio_entrega: Optional[int] = Field(None, alias="avgDeliveryTime", ge=0)
    horario_abertura: Optional[Horario] = Field(None, alias="openTime")
    horario_fechamento: Optional[Horario] = Field(None, alias="closeTime")
    dias_funcionamento: Optional[List[DiaSemana]] = Field(None, alias="operatingDays")
    formas_pagamento: Optional[List[constr(min_length=1, max_length=50)]] = Field(None, alias="paymentMethods")

    @field_validator("formas_pagamento")
    @classmethod
    def formas_sem_repeticao(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("Informe ao menos uma forma de pagamento")
        return list(dict.fromkeys(v))


class EmpresaCreate(EmpresaBase):
    nome: constr(min_length=1, max_length=255) = Field(..., alias="name")
    slug: Optional[constr(max_length=100)] = None
    ativo: bool = Field(True, alias="isActive")


class EmpresaUpdate(EmpresaBase):
    nome: Optional[constr(min_length=1, max_length=255)] = Field(None, alias="name")
    ativo: Optional[bool] = Field(None, alias="isActive")


class EmpresaResponse(ApiModel):
    id: int
    nome: str = Field(..., alias="name")
    slug: str
    telefone: Optional[str] = Field(None, alias="phone")
    endereco: Optional[str] = Field(None, alias="address")
    taxa_entrega: Dinheiro = Field(..., alias="deliveryFee")
    raio_entrega: int = Field(..., alias="deliveryRadius")
    pedido_minimo: Dinheiro = Field(..., alias="minOrderValue")
    tempo_medio_entrega: int = Field(..., alias="avgDeliveryTime")
    horario_abertura: str = Field(..., alias="openTime")
    horario_fechamento: str = Field(..., alias="closeTime")
    dias_funcionamento: List[str] = Field(..., alias="operatingDays")
    formas_pagamento: List[str] = Field(..., alias="paymentMethods")
    ativo: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
