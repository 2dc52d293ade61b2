from fastapi import APIRouter

from routes import (
    auth,
    contact,
    events,
    games,
    members,
    news,
    orders,
    partners,
    products,
    registrations,
    shop_settings,
    teams,
    videos,
)

api_router = APIRouter()

for module in (
    auth,
    events,
    members,
    teams,
    games,
    news,
    partners,
    products,
    orders,
    shop_settings,
    registrations,
    contact,
    videos,
):
    api_router.include_router(module.router)
