from datetime import datetime
from typing import Dict, Optional

from pydantic import Field, constr

from app.api.shared.schemas import ApiModel, Dinheiro, PriceMap


# ======================================================================
# ============================ CATEGORIAS ==============================
# ======================================================================
class CategoriaCreate(ApiModel):
    nome: constr(min_length=1, max_length=100) = Field(..., alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    ordem: int = Field(0, alias="sortOrder")
    ativo: bool = Field(True, alias="isActive")


class CategoriaUpdate(ApiModel):
    nome: Optional[constr(min_length=1, max_length=100)] = Field(None, alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    ordem: Optional[int] = Field(None, alias="sortOrder")
    ativo: Optional[bool] = Field(None, alias="isActive")


class CategoriaOut(ApiModel):
    id: int
    empresa_id: int = Field(..., alias="tenantId")
    nome: str = Field(..., alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    ordem: int = Field(..., alias="sortOrder")
    ativo: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")


# ======================================================================
# ============================== ITENS =================================
# ======================================================================
class ItemCardapioCreate(ApiModel):
    categoria_id: int = Field(..., alias="categoryId", gt=0)
    nome: constr(min_length=1, max_length=255) = Field(..., alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    imagem: Optional[constr(max_length=500)] = Field(None, alias="imageUrl")
    precos: PriceMap = Field(..., alias="prices")
    disponivel: bool = Field(True, alias="isAvailable")
    ordem: int = Field(0, alias="sortOrder")


class ItemCardapioUpdate(ApiModel):
    categoria_id: Optional[int] = Field(None, alias="categoryId", gt=0)
    nome: Optional[constr(min_length=1, max_length=255)] = Field(None, alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    imagem: Optional[constr(max_length=500)] = Field(None, alias="imageUrl")
    precos: Optional[PriceMap] = Field(None, alias="prices")
    disponivel: Optional[bool] = Field(None, alias="isAvailable")
    ordem: Optional[int] = Field(None, alias="sortOrder")


class ItemCardapioOut(ApiModel):
    id: int
    empresa_id: int = Field(..., alias="tenantId")
    categoria_id: int = Field(..., alias="categoryId")
    nome: str = Field(..., alias="name")
    descricao: Optional[str] = Field(None, alias="description")
    imagem: Optional[str] = Field(None, alias="imageUrl")
    precos: Dict[str, Dinheiro] = Field(..., alias="prices")
    disponivel: bool = Field(..., alias="isAvailable")
    ordem: int = Field(..., alias="sortOrder")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
