from datetime import datetime
from typing import Optional, List

from pydantic import EmailStr, Field, constr, model_validator

from app.api.shared.schemas import ApiModel, Dinheiro, Endereco


class ClienteOut(ApiModel):
    id: int
    empresa_id: int = Field(..., alias="tenantId")
    nome: str = Field(..., alias="name")
    telefone: str = Field(..., alias="phone")
    email: Optional[str] = None
    enderecos: List[Endereco] = Field(default_factory=list, alias="addresses")
    total_pedidos: int = Field(..., alias="totalOrders")
    total_gasto: Dinheiro = Field(..., alias="totalSpent")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ClienteCreate(ApiModel):
    """Agregados (totalOrders/totalSpent) não são aceitos: só a criação de pedidos os altera."""
    nome: constr(min_length=1, max_length=255) = Field(..., alias="name")
    telefone: constr(min_length=1, max_length=20) = Field(..., alias="phone")
    email: Optional[EmailStr] = None
    enderecos: List[Endereco] = Field(default_factory=list, alias="addresses")

    @model_validator(mode='before')
    @classmethod
    def normalize_empty_strings(cls, data):
        """Converte email vazio para None."""
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data["email"] = data["email"].strip() or None
        return data


class ClienteUpdate(ApiModel):
    nome: Optional[constr(min_length=1, max_length=255)] = Field(None, alias="name")
    telefone: Optional[constr(min_length=1, max_length=20)] = Field(None, alias="phone")
    email: Optional[EmailStr] = None
    enderecos: Optional[List[Endereco]] = Field(None, alias="addresses")

    @model_validator(mode='before')
    @classmethod
    def normalize_empty_strings(cls, data):
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data["email"] = data["email"].strip() or None
        return data
