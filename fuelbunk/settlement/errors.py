# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# --- codes ---
MISSING_READING = "missing_reading"
INVALID_RANGE = "invalid_range"
INVALID_FUEL_TYPE = "invalid_fuel_type"
INVALID_PRICE = "invalid_price"
NO_PUMPS = "no_pumps"
NO_PAYMENT = "no_payment"
INVALID_AMOUNT = "invalid_amount"
INVALID_DATE = "invalid_date"
INVALID_MONTH = "invalid_month"
INVALID_RECORD = "invalid_record"
DUPLICATE_RECORD = "duplicate_record"
NO_ITEMS = "no_items"
REQUIRED = "required"
NOT_OPEN = "not_open"
NOT_FOUND = "not_found"


@dataclass(frozen=True)
class FieldError:
    """One offending field; `pump` is set when the field belongs to a pump reading."""

    field: str
    code: str
    message: str
    pump: str | None = None
    index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"field": self.field, "code": self.code, "message": self.message}
        if self.pump is not None:
            out["pump"] = self.pump
        if self.index is not None:
            out["index"] = self.index
        return out


class SettlementError(Exception):
    code = "error"

    def __init__(self, message: str, code: str | None = None, **details: Any):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"ok": False, "error": self.code, "message": self.message}
        if self.details:
            out["details"] = self.details
        return out


class ValidationError(SettlementError):
    """Input is malformed or breaks an invariant. Carries every field error found."""

    code = "validation_error"

    def __init__(self, errors: list[FieldError] | FieldError, message: str | None = None):
        if isinstance(errors, FieldError):
            errors = [errors]
        self.errors = list(errors)
        first = self.errors[0] if self.errors else None
        code = first.code if first and len({e.code for e in self.errors}) == 1 else self.code
        super().__init__(message or "; ".join(e.message for e in self.errors) or "invalid input", code)

    @classmethod
    def single(cls, field: str, code: str, message: str, **kw: Any) -> "ValidationError":
        return cls(FieldError(field=field, code=code, message=message, **kw))

    @property
    def pumps(self) -> list[str]:
        seen: list[str] = []
        for e in self.errors:
            if e.pump is not None and e.pump not in seen:
                seen.append(e.pump)
        return seen

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["errors"] = [e.to_dict() for e in self.errors]
        return out


class StateError(SettlementError):
    code = NOT_OPEN


class NotFoundError(SettlementError):
    code = NOT_FOUND

    def __init__(self, kind: str, ident: Any):
        super().__init__(f"{kind} {ident} not found", NOT_FOUND, kind=kind, id=str(ident))
        self.kind = kind
        self.ident = ident
