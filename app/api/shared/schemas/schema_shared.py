from decimal import Decimal
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, RootModel, field_validator

# Valores monetários trafegam como número com 2 casas (ex.: 64.0)
Dinheiro = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class ApiModel(BaseModel):
    """
    Base dos schemas expostos na API.
    Atributos em português; no JSON valem os aliases (camelCase).
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class Endereco(ApiModel):
    rua: str = Field(..., alias="street", min_length=1, max_length=255)
    bairro: str = Field(..., alias="neighborhood", min_length=1, max_length=120)
    cidade: str = Field(..., alias="city", min_length=1, max_length=120)
    cep: Optional[str] = Field(None, alias="zipCode", max_length=10)
    referencia: Optional[str] = Field(None, alias="reference", max_length=255)

    @field_validator("rua", "bairro", "cidade", mode="before")
    @classmethod
    def strip_obrigatorios(cls, v):
        return v.strip() if isinstance(v, str) else v


class PriceMap(RootModel[Dict[str, Decimal]]):
    """
    Preço por tamanho ("P", "M", "G", "Família" ou "Único").
    A ordem das chaves é preservada (ordem de exibição).
    """

    @field_validator("root")
    @classmethod
    def validar_precos(cls, v: Dict[str, Decimal]) -> Dict[str, Decimal]:
        if not v:
            raise ValueError("Informe ao menos um preço")
        for tamanho, preco in v.items():
            if not tamanho or not tamanho.strip():
                raise ValueError("Tamanho não pode ser vazio")
            if preco < 0:
                raise ValueError(f"Preço do tamanho '{tamanho}' não pode ser negativo")
        return v

    def para_json(self) -> Dict[str, str]:
        """Formato gravado na coluna JSON (valores como string para não perder centavos)."""
        return {tamanho: str(preco.quantize(Decimal("0.01"))) for tamanho, preco in self.root.items()}
