"""
Erros de domínio.

Os serviços levantam estas exceções; a tradução para HTTP fica nos
handlers registrados em `app.main` (ver `app.core.exception_handlers`).
"""
from starlette import status


class DomainError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Erro de domínio"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Campo ausente ou malformado, enum inválido, valores inconsistentes."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Dados inválidos"


class NotFoundError(DomainError):
    """Empresa, cliente, pedido ou item do cardápio inexistente (ou fora do escopo do usuário)."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Registro não encontrado"


class PersistenceError(DomainError):
    """Falha no banco. A mensagem exposta é genérica; o detalhe fica no log."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Erro ao acessar o banco de dados"
