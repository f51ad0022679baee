# Routers package: thin controllers
from stockkeeper.routers import (
    products,
    warehouses,
    stock,
    transfers,
    alerts,
    dashboard,
)

__all__ = [
    "products",
    "warehouses",
    "stock",
    "transfers",
    "alerts",
    "dashboard",
]
