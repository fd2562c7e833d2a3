"""
Errors raised by repositories and rendered by the exception handlers in main.

    InventoryError (base)
    +-- ValidationError   400  bad enum, missing field, unresolved reference
    +-- NotFoundError     404  unknown id on get/patch/put/delete
    +-- ConflictError     409  unique constraint violation
"""
from typing import Dict, Optional


class InventoryError(Exception):
    status_code: int = 500
    code: str = "INVENTORY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(InventoryError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        if message is None:
            message = "; ".join(f"{k}: {v}" for k, v in self.errors.items()) or "invalid record"
        super().__init__(message)

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["errors"] = self.errors
        return out


class NotFoundError(InventoryError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, record_id):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id


class ConflictError(InventoryError):
    status_code = 409
    code = "CONFLICT"
