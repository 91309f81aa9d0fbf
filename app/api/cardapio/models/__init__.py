"""
Models do bounded context de Cardápio.
"""

from .model_categoria import CategoriaCardapioModel
from .model_item import ItemCardapioModel

__all__ = [
    "CategoriaCardapioModel",
    "ItemCardapioModel",
]
