"""Write a small demo dataset into DATA_DIR.

Usage:
    python scripts/seed_data.py [--data-dir PATH] [--force]

Refuses to touch a data directory whose products, warehouses or stock
collections already hold records unless --force is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from stockkeeper.config import settings
from stockkeeper.database import JsonFileStore
from stockkeeper.utils.logging import configure_logging

logger = logging.getLogger("stockkeeper.seed")

PRODUCTS = [
    {"id": 1, "sku": "FAS-001", "name": "Hex Bolt M8", "category": "Fasteners", "unitCost": 0.35, "reorderPoint": 200},
    {"id": 2, "sku": "FAS-002", "name": "Lock Washer M8", "category": "Fasteners", "unitCost": 0.05, "reorderPoint": 300},
    {"id": 3, "sku": "TLS-010", "name": "Torque Wrench", "category": "Tools", "unitCost": 89.0, "reorderPoint": 5},
    {"id": 4, "sku": "SAF-100", "name": "Safety Goggles", "category": "Safety", "unitCost": 6.5, "reorderPoint": 40},
]

WAREHOUSES = [
    {"id": 1, "code": "CHI-01", "name": "Chicago Central", "location": "Chicago, IL"},
    {"id": 2, "code": "DAL-01", "name": "Dallas South", "location": "Dallas, TX"},
    {"id": 3, "code": "SEA-01", "name": "Seattle North", "location": "Seattle, WA"},
]

STOCK = [
    {"id": 1, "productId": 1, "warehouseId": 1, "quantity": 1200},
    {"id": 2, "productId": 1, "warehouseId": 2, "quantity": 150},
    {"id": 3, "productId": 2, "warehouseId": 1, "quantity": 450},
    {"id": 4, "productId": 3, "warehouseId": 2, "quantity": 0},
    {"id": 5, "productId": 3, "warehouseId": 3, "quantity": 9},
    {"id": 6, "productId": 4, "warehouseId": 3, "quantity": 38},
]

SEED = {"products": PRODUCTS, "warehouses": WAREHOUSES, "stock": STOCK}


def seed(data_dir: Path, force: bool = False) -> bool:
    store = JsonFileStore(data_dir)
    store.ensure_files()

    populated = [name for name in SEED if store.load_all(name)]
    if populated and not force:
        logger.warning("seed_skipped", extra={"populated": populated, "hint": "use --force"})
        return False

    store.write_many({**SEED, "transfers": [], "alerts": [], "order_history": []})
    logger.info(
        "seed_written",
        extra={
            "products": len(PRODUCTS),
            "warehouses": len(WAREHOUSES),
            "stock": len(STOCK),
            "data_dir": str(data_dir),
        },
    )
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=settings.data_path)
    parser.add_argument("--force", action="store_true", help="overwrite existing collections")
    args = parser.parse_args()

    configure_logging(log_level=settings.LOG_LEVEL, log_format="text")
    sys.exit(0 if seed(args.data_dir, force=args.force) else 1)
