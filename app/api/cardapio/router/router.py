from fastapi import APIRouter

from app.api.cardapio.router.admin.router_cardapio_admin import router as router_cardapio_admin

api_cardapio = APIRouter(
    tags=["API - Cardápio"]
)

# Routers para admin (usam get_current_user)
api_cardapio.include_router(router_cardapio_admin)
