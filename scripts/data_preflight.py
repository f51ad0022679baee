"""Data directory preflight checks.

Usage:
    python scripts/data_preflight.py [--data-dir PATH]

Verifies every collection file before the API is started against it.
Exits non-zero when any required check fails.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from stockkeeper.config import settings
from stockkeeper.core.exceptions import StorageException
from stockkeeper.database import COLLECTIONS, JsonFileStore
from stockkeeper.repositories.base import as_int


def _duplicates(values) -> list:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def collect_checks(data_dir: Path) -> list[tuple[str, bool, str]]:
    store = JsonFileStore(data_dir)
    checks: list[tuple[str, bool, str]] = [
        ("DATA_DIR exists", data_dir.is_dir(), f"DATA_DIR={data_dir}"),
    ]

    loaded: dict[str, list] = {}
    for name in COLLECTIONS:
        try:
            loaded[name] = store.load_all(name)
        except StorageException as exc:
            checks.append((f"{name}.json is a JSON array", False, exc.message))
            continue
        checks.append((f"{name}.json is a JSON array", True, f"{len(loaded[name])} records"))

        if name == "alerts":
            ids = [str(r.get("id")) for r in loaded[name]]
        else:
            ids = [as_int(r.get("id")) for r in loaded[name]]
        duplicate_ids = _duplicates(i for i in ids if i is not None)
        checks.append((
            f"{name} ids are unique",
            not duplicate_ids,
            f"duplicates={duplicate_ids}" if duplicate_ids else "ok",
        ))

    if "stock" in loaded:
        pairs = [
            (r.get("id"), as_int(r.get("productId")), as_int(r.get("warehouseId")))
            for r in loaded["stock"]
        ]
        unreferenced = [
            record_id for record_id, product_id, warehouse_id in pairs
            if product_id is None or warehouse_id is None
        ]
        checks.append((
            "stock records reference a productId and warehouseId",
            not unreferenced,
            f"stock ids={unreferenced}" if unreferenced else "ok",
        ))

        duplicate_pairs = _duplicates(
            (product_id, warehouse_id) for _, product_id, warehouse_id in pairs
            if product_id is not None and warehouse_id is not None
        )
        checks.append((
            "one stock record per (productId, warehouseId)",
            not duplicate_pairs,
            f"duplicates={duplicate_pairs}" if duplicate_pairs else "ok",
        ))

    return checks


def run(data_dir: Path) -> int:
    has_failures = False
    print("Stockkeeper Data Preflight")
    print(f"- environment: {settings.ENVIRONMENT}")
    for title, ok, detail in collect_checks(data_dir):
        marker = "PASS" if ok else "FAIL"
        print(f"[{marker}] {title} ({detail})")
        if not ok:
            has_failures = True

    if has_failures:
        print("\nPreflight failed. Resolve failed checks before starting the API.")
        return 1

    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=settings.data_path)
    args = parser.parse_args()
    sys.exit(run(args.data_dir))
