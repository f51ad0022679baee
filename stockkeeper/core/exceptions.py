"""
Domain exceptions.

Services raise these; the global handler in ``stockkeeper.main`` turns them
into ``{"success": false, "error": {"code": ..., "message": ...}}`` responses.
"""
from typing import Any, Optional

from fastapi import HTTPException


class StockkeeperException(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ── Validation ────────────────────────────────────────────────────────────────

class ValidationException(StockkeeperException):
    code = "VALIDATION_ERROR"
    status_code = 400


class MissingFieldsError(ValidationException):
    code = "MISSING_FIELDS"

    def __init__(self, fields: Optional[list] = None):
        super().__init__("Missing required fields.", details={"fields": fields or []})


class SameWarehouseError(ValidationException):
    code = "SAME_WAREHOUSE"

    def __init__(self, warehouse_id: Any):
        super().__init__(
            "Source and destination cannot be the same.",
            details={"warehouse_id": warehouse_id},
        )


# ── Lookup ────────────────────────────────────────────────────────────────────

class EntityNotFoundException(StockkeeperException):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None):
        super().__init__(message or f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class SourceNotFoundError(EntityNotFoundException):
    code = "SOURCE_NOT_FOUND"

    def __init__(self, warehouse_id: Any, product_id: Any):
        super().__init__(
            "StockRecord",
            f"{warehouse_id}:{product_id}",
            message="Source warehouse does not contain this product.",
        )


# ── Business rules ────────────────────────────────────────────────────────────

class BusinessRuleViolationException(StockkeeperException):
    code = "BUSINESS_RULE_VIOLATION"
    status_code = 400


class InsufficientStockError(BusinessRuleViolationException):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, available: int, requested: int):
        super().__init__(
            "Insufficient stock in source warehouse.",
            details={"available": available, "requested": requested},
        )
        self.available = available
        self.requested = requested


# ── Conflicts ─────────────────────────────────────────────────────────────────

class ConflictException(StockkeeperException):
    code = "CONFLICT"
    status_code = 409


class DuplicateStockRecordException(ConflictException):
    code = "DUPLICATE_STOCK_RECORD"

    def __init__(self, product_id: Any, warehouse_id: Any):
        super().__init__(
            f"A stock record for product {product_id} in warehouse {warehouse_id} already exists.",
            details={"product_id": product_id, "warehouse_id": warehouse_id},
        )


class ConcurrentModificationException(ConflictException):
    code = "CONCURRENT_MODIFICATION"

    def __init__(self, collections: list):
        super().__init__(
            f"Collections changed by another request: {', '.join(collections)}. Retry the operation.",
            details={"collections": collections},
        )


# ── Storage ───────────────────────────────────────────────────────────────────

class StorageException(StockkeeperException):
    code = "STORAGE_ERROR"
    status_code = 500

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Cannot access '{collection}' collection: {reason}")
        self.collection = collection


def to_http_exception(exc: StockkeeperException) -> HTTPException:
    return HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": exc.message},
    )
