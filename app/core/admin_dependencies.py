# app/core/admin_dependencies.py

from fastapi import Depends, HTTPException, status, Request, Path
from jose import JWTError
from sqlalchemy.orm import Session

from app.api.cadastros.models.user_model import UserModel
from app.api.cadastros.repositories.repo_usuario import UsuarioRepository
from app.core.contexto import ContextoRequisicao
from app.core.security import decode_access_token
from app.database.db_connection import get_db
from app.utils.logger import logger

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Não autenticado",
    headers={"WWW-Authenticate": "Bearer"},
)

forbidden_exception = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Você não tem permissão para acessar esta empresa",
)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Recupera o usuário autenticado a partir do header Authorization (Bearer <token>).
    """
    # 1. Pega o token do header Authorization
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("[AUTH] Cabeçalho Authorization ausente ou malformado.")
        raise credentials_exception

    access_token = auth_header.replace("Bearer ", "")

    # 2. Decodifica o JWT
    try:
        payload = decode_access_token(access_token)
        raw_sub = payload.get("sub")
        if raw_sub is None:
            raise credentials_exception
        user_id = int(raw_sub)
    except (JWTError, ValueError) as e:
        logger.error(f"[AUTH] Erro ao decodificar JWT: {e}")
        raise credentials_exception

    # 3. Busca o usuário no banco
    user = UsuarioRepository(db).get_by_id(user_id)
    if not user or not user.ativo:
        raise credentials_exception

    return user


def get_contexto(
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContextoRequisicao:
    """Contexto do request: usuário e empresas às quais está vinculado."""
    empresa_ids = UsuarioRepository(db).listar_empresa_ids(current_user.id)
    return ContextoRequisicao(usuario_id=current_user.id, empresa_ids=frozenset(empresa_ids))


def get_contexto_empresa(
    empresa_id: int = Path(..., description="ID da empresa", gt=0),
    contexto: ContextoRequisicao = Depends(get_contexto),
) -> ContextoRequisicao:
    """Igual a `get_contexto`, exigindo vínculo com a empresa da rota."""
    if not contexto.pode_acessar(empresa_id):
        logger.warning(
            "[AUTH] Acesso negado. usuario_id=%s não vinculado à empresa_id=%s",
            contexto.usuario_id,
            empresa_id,
        )
        raise forbidden_exception
    return contexto
