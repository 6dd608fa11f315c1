"""
ITR API: Employee Store (Record Store)
======================================

What:  The only component that reads or writes the `employees` table.
How:   Each operation receives the request's AsyncSession and issues
       exactly one SQL statement. The session dependency commits or rolls
       back around it; the store never opens its own transaction.
Who:   Called by the request handlers in routes/employees.py.

Operations:
    create(db, fields)        → Employee     INSERT
    find_by_id(db, id)        → Employee     SELECT ... WHERE employee_id = :id
    find_all(db)              → [Employee]   SELECT ... ORDER BY employee_id
    update(db, id, fields)    → rows (0|1)   UPDATE ... WHERE employee_id = :id
    delete(db, id)            → rows (0|1)   DELETE ... WHERE employee_id = :id

Error Handling:
    Missing required fields raise ValidationError before any SQL runs.
    A missing row on lookup raises NotFoundError. Update and delete report
    a missing row as 0 rows affected instead of raising. Driver and
    statement failures are logged and wrapped in PersistenceError.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from itr_api.exceptions import NotFoundError, PersistenceError, ValidationError
from itr_api.models.employee import Employee, utc_now

logger = logging.getLogger(__name__)

# Fields a create or update body must carry; deductions is optional
REQUIRED_FIELDS = ("name", "salary", "pan_number", "year", "tax_income", "designation")
MUTABLE_FIELDS = REQUIRED_FIELDS + ("deductions",)

# OSError covers refused/reset connections raised before the driver wraps them
DATABASE_ERRORS = (SQLAlchemyError, OSError)


class EmployeeStore:
    """
    Stateless data-access layer for employee records.

    The store holds no connection of its own; sessions come from the
    process-wide pool via the request's dependency, so a single instance
    is shared by every request.
    """

    @staticmethod
    def _mutable_values(fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Extracts every mutable column value from `fields`.

        Raises:
            ValidationError: A required field is missing or blank.
        """
        for name in REQUIRED_FIELDS:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(
                    message=f"Missing required field: {name}",
                    field=name,
                )

        values = {name: fields[name] for name in REQUIRED_FIELDS}
        deductions = fields.get("deductions")
        if isinstance(deductions, str) and not deductions.strip():
            deductions = None
        values["deductions"] = deductions
        return values

    async def create(self, db: AsyncSession, fields: Mapping[str, Any]) -> Employee:
        """
        Insert a new record and return it with its generated identifier.

        Both timestamps are set to the same instant. `joining_date`
        defaults to today's UTC date when not supplied.

        Raises:
            ValidationError: A required field is missing or blank (→ 400)
            PersistenceError: The INSERT failed (→ 500)
        """
        values = self._mutable_values(fields)
        now = utc_now()
        employee = Employee(
            **values,
            joining_date=fields.get("joining_date") or now.date(),
            created_at=now,
            updated_at=now,
        )

        try:
            db.add(employee)
            await db.flush()  # Runs the INSERT and assigns employee_id
        except DATABASE_ERRORS as e:
            logger.error("Database error creating employee: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not create the employee. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Employee %s created", employee.employee_id)
        return employee

    async def find_by_id(self, db: AsyncSession, employee_id: int) -> Employee:
        """
        Retrieve a single record by identifier.

        Raises:
            NotFoundError: No record has this identifier (→ 404)
            PersistenceError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Employee)
                .where(Employee.employee_id == employee_id)
                .execution_options(populate_existing=True)
            )
            employee = result.scalar_one_or_none()
        except DATABASE_ERRORS as e:
            logger.error("Database error fetching employee %s: %s", employee_id, str(e))
            raise PersistenceError(
                message="Could not retrieve the employee. Please try again.",
                context={"employee_id": employee_id, "error_type": type(e).__name__},
            ) from e

        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        return employee

    async def find_all(self, db: AsyncSession) -> List[Employee]:
        """
        Return every record in insertion (identifier) order.

        An empty table yields an empty list.
        """
        try:
            result = await db.execute(
                select(Employee)
                .order_by(Employee.employee_id)
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            logger.error("Database error listing employees: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve employees. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def update(
        self, db: AsyncSession, employee_id: int, fields: Mapping[str, Any]
    ) -> int:
        """
        Overwrite every mutable field of a record and refresh `updated_at`.

        There is no partial-patch mode: all required fields must be given,
        and an omitted `deductions` clears the stored value.

        Returns:
            Rows affected: 0 when the identifier does not exist, else 1.

        Raises:
            ValidationError: A required field is missing or blank (→ 400)
            PersistenceError: The UPDATE failed (→ 500)
        """
        values = self._mutable_values(fields)
        try:
            result = await db.execute(
                update(Employee)
                .where(Employee.employee_id == employee_id)
                .values(**values, updated_at=utc_now())
            )
        except DATABASE_ERRORS as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise PersistenceError(
                message="Could not update the employee. Please try again.",
                context={"employee_id": employee_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Employee %s updated: %d row(s) affected", employee_id, result.rowcount)
        return result.rowcount

    async def delete(self, db: AsyncSession, employee_id: int) -> int:
        """
        Hard-delete a record.

        Returns:
            Rows affected: 0 when the identifier does not exist, else 1.

        Raises:
            PersistenceError: The DELETE failed (→ 500)
        """
        try:
            result = await db.execute(
                delete(Employee).where(Employee.employee_id == employee_id)
            )
        except DATABASE_ERRORS as e:
            logger.error("Database error deleting employee %s: %s", employee_id, str(e))
            raise PersistenceError(
                message="Could not delete the employee. Please try again.",
                context={"employee_id": employee_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Employee %s deleted: %d row(s) affected", employee_id, result.rowcount)
        return result.rowcount


# ── Singleton Instance ────────────────────────────────────────────────────
employee_store = EmployeeStore()
