# app/api/__init__.py
from app.api.routers import carts, catalog, health, orders, payments, users

ROUTERS = (
    health.router,
    users.router,
    carts.router,
    catalog.products_router,
    catalog.categories_router,
    orders.router,
    payments.router,
)
