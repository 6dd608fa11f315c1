"""
ITR API: Pydantic Request/Response Schemas
==========================================

What:  Pydantic models defining the API contract.
How:   FastAPI validates request bodies against the request DTOs before a
       handler runs, serializes responses through the response models, and
       generates the OpenAPI document from both.

Monetary fields (salary, tax_income, deductions) accept a JSON string or
number holding a non-negative decimal and are carried as the decimal text,
so the value read back is exactly the value that was written.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _decimal_text(value: Any) -> Any:
    """Normalizes a JSON number/string into validated decimal text."""
    if isinstance(value, bool):
        raise ValueError("must be a decimal number")
    if isinstance(value, (int, float, Decimal)):
        value = str(value)
    if not isinstance(value, str):
        return value  # rejected by the str field type
    text_value = value.strip()
    try:
        amount = Decimal(text_value)
    except InvalidOperation:
        raise ValueError("must be a decimal number")
    if not amount.is_finite() or amount < 0:
        raise ValueError("must be a non-negative decimal number")
    return text_value


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class EmployeeFields(BaseModel):
    """
    Every mutable field of an employee record.

    Used as-is for updates, which replace the whole record: a field left
    out of an update body is a validation error, except `deductions`,
    whose absence clears the stored value.
    """

    name: str = Field(min_length=1, max_length=255, description="Employee name")
    salary: str = Field(description="Salary as a decimal, e.g. \"50000\" or 50000.50")
    pan_number: str = Field(
        min_length=1, max_length=20, description="PAN / tax identification number"
    )
    year: int = Field(ge=1900, le=2100, description="Tax year of the filing")
    tax_income: str = Field(description="Taxable income as a decimal")
    deductions: Optional[str] = Field(
        default=None,
        description="Deductions as a decimal; omit or send null when none were recorded",
    )
    designation: str = Field(min_length=1, max_length=255, description="Job title")

    model_config = {"str_strip_whitespace": True}

    @field_validator("salary", "tax_income", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Any:
        return _decimal_text(v)

    @field_validator("deductions", mode="before")
    @classmethod
    def validate_deductions(cls, v: Any) -> Any:
        """Blank deductions mean "not recorded", never zero."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return _decimal_text(v)

    @field_validator("pan_number")
    @classmethod
    def normalize_pan(cls, v: str) -> str:
        return v.upper()


class EmployeeCreate(EmployeeFields):
    """Body of POST /v1/create."""

    joining_date: Optional[date] = Field(
        default=None,
        description="Date the employee joined (ISO 8601); defaults to today (UTC)",
    )


class EmployeeUpdate(EmployeeFields):
    """Body of PUT/PATCH /v1/update/{id}; full replacement of mutable fields."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """Full representation of a stored record."""

    employee_id: int = Field(description="Identifier generated at creation")
    created_at: datetime
    updated_at: datetime
    name: str
    joining_date: date
    salary: str
    pan_number: str
    year: int
    tax_income: str
    deductions: Optional[str] = None
    designation: str

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        """Timestamps are stored in UTC; SQLite hands them back without tzinfo."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class StatusResponse(BaseModel):
    """Acknowledgement returned by update and delete."""

    status: str = Field(default="success")
    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
