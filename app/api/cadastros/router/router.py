from fastapi import APIRouter

from app.api.cadastros.router.admin.router_clientes import router as router_clientes

router = APIRouter()

# Admin
router.include_router(router_clientes)
