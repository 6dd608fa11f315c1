"""
ITR API: Employee SQLAlchemy Model
==================================

What:  ORM model representing the `employees` table.
How:   Inherits from the shared DeclarativeBase; `create_tables` reads the
       metadata to issue CREATE TABLE at startup.
Who:   Used by EmployeeStore for every CRUD statement.

Table Design:
    - employee_id: integer identity, generated by the database on insert
    - created_at / updated_at: UTC with timezone; created_at is written once
    - salary, tax_income, deductions: the exact decimal literal the client
      sent, stored as text so a read returns the same digits
    - deductions: NULL means "no deduction recorded", which is not zero
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from itr_api.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


class Employee(Base):
    """
    One income-tax-return filing for one person.

    Lifecycle:
        1. Inserted by EmployeeStore.create (both timestamps = now)
        2. Overwritten by EmployeeStore.update (updated_at refreshed;
           employee_id, created_at and joining_date untouched)
        3. Removed by EmployeeStore.delete (hard delete, no tombstone)
    """

    __tablename__ = "employees"

    # ── Primary Key ───────────────────────────────────────────────────────
    # SQLite only autoincrements an INTEGER PRIMARY KEY (rowid alias)
    employee_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
        comment="Identifier generated by the database",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When the record was created (UTC); never changes",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When the record was last written (UTC)",
    )

    # ── Filing Data ───────────────────────────────────────────────────────
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    joining_date: Mapped[date] = mapped_column(Date, nullable=False, default=utc_today)
    salary: Mapped[str] = mapped_column(Text, nullable=False)
    pan_number: Mapped[str] = mapped_column(String(20), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    tax_income: Mapped[str] = mapped_column(Text, nullable=False)
    deductions: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="NULL when no deduction was recorded",
    )
    designation: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Employee(employee_id={self.employee_id}, name='{self.name}', "
            f"year={self.year})>"
        )
