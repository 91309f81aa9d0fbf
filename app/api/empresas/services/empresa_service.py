# app/api/empresas/services/empresa_service.py
from sqlalchemy.orm import Session

from app.api.cadastros.repositories.repo_usuario import UsuarioRepository
from app.api.empresas.models.empresa_model import EmpresaModel
from app.api.empresas.repositories.empresa_repo import EmpresaRepository
from app.api.empresas.schemas.schema_empresa import EmpresaCreate, EmpresaUpdate
from app.core.contexto import ContextoRequisicao
from app.core.exceptions import NotFoundError, ValidationError
from app.database.db_connection import transacao
from app.utils.database_utils import quantizar
from app.utils.logger import logger
from app.utils.slug_utils import make_slug

# Campos que aceitam null na atualização
CAMPOS_OPCIONAIS = {"telefone", "endereco"}
CAMPOS_MONETARIOS = {"taxa_entrega", "pedido_minimo"}


class EmpresaService:
    def __init__(self, db: Session):
        self.repo_emp = EmpresaRepository(db)
        self.repo_usuario = UsuarioRepository(db)
        self.db = db

    # Recupera empresa
    def get_empresa(self, contexto: ContextoRequisicao, id: int) -> EmpresaModel:
        empresa = self.repo_emp.get_empresa_by_id(id)
        if not empresa or not contexto.pode_acessar(empresa.id):
            raise NotFoundError("Empresa não encontrada")
        return empresa

    def get_por_slug(self, slug: str) -> EmpresaModel:
        """Sem checagem de vínculo: o router decide entre 404 e 403."""
        empresa = self.repo_emp.get_emp_by_slug(slug)
        if not empresa:
            raise NotFoundError("Empresa não encontrada")
        return empresa

    # Lista empresas do usuário
    def list_empresas(self, contexto: ContextoRequisicao) -> list[EmpresaModel]:
        return self.repo_emp.list_by_ids(sorted(contexto.empresa_ids))

    # Cria empresa
    def create_empresa(self, contexto: ContextoRequisicao, data: EmpresaCreate) -> EmpresaModel:
        slug = make_slug(data.slug or data.nome)
        if not slug:
            raise ValidationError("Não foi possível gerar o slug da empresa")
        if self.repo_emp.get_emp_by_slug(slug):
            raise ValidationError(f"Slug já cadastrado: {slug}")

        dados = data.model_dump(exclude_none=True, exclude={"slug"})
        for campo in CAMPOS_MONETARIOS & dados.keys():
            dados[campo] = quantizar(dados[campo])

        with transacao(self.db):
            empresa = self.repo_emp.create(EmpresaModel(slug=slug, **dados))
            # Quem cadastra vira admin da empresa
            if contexto.usuario_id is not None:
                self.repo_usuario.vincular_empresa(contexto.usuario_id, empresa.id, papel="admin")

        self.db.refresh(empresa)
        logger.info(f"[Empresas] Empresa criada id={empresa.id} slug={empresa.slug}")
        return empresa

    # Atualiza configurações
    def update_empresa(self, contexto: ContextoRequisicao, id: int, data: EmpresaUpdate) -> EmpresaModel:
        empresa = self.get_empresa(contexto, id)

        dados = {
            campo: valor
            for campo, valor in data.model_dump(exclude_unset=True).items()
            if valor is not None or campo in CAMPOS_OPCIONAIS
        }
        for campo in CAMPOS_MONETARIOS & dados.keys():
            dados[campo] = quantizar(dados[campo])

        with transacao(self.db):
            self.repo_emp.update(empresa, dados)
        self.db.refresh(empresa)
        logger.info(f"[Empresas] Empresa atualizada id={empresa.id} campos={sorted(dados)}")
        return empresa
