from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class ContextoRequisicao:
    """
    Quem está chamando e a quais empresas está vinculado.

    Montado pela camada de autenticação a cada request e passado
    explicitamente como primeiro parâmetro das operações dos serviços.
    """
    usuario_id: Optional[int]
    empresa_ids: FrozenSet[int] = field(default_factory=frozenset)

    def pode_acessar(self, empresa_id: int) -> bool:
        return empresa_id in self.empresa_ids
