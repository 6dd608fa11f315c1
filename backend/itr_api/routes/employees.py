"""
ITR API: Employee Route Handlers
================================

What:  One handler per CRUD verb over employee records.
How:   Each handler decodes the path/body, delegates to the record store,
       and returns the record or a status message. Errors raised by the
       store propagate to the global exception handlers in main.py.
Who:   Mounted by create_app() under the /v1 prefix.

Routes:
    POST         /v1/create              → 201 + created record
    GET          /v1/find/{employee_id}  → 200 + record
    PUT | PATCH  /v1/update/{employee_id}→ 200 + {status, message}
    DELETE       /v1/delete/{employee_id}→ 200 + {status, message}
    GET          /v1/findall             → 200 + [record, ...]
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from itr_api.database import get_db_session
from itr_api.exceptions import NotFoundError, ValidationError
from itr_api.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
    StatusResponse,
)
from itr_api.services.employee_store import employee_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Employees"])

_BAD_REQUEST = {400: {"description": "Malformed input", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Employee not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}

# Upper bound of the BIGINT identity column
MAX_EMPLOYEE_ID = 2**63 - 1
MAX_ID_DIGITS = len(str(MAX_EMPLOYEE_ID))


def parse_employee_id(
    employee_id: str = Path(description="Positive integer employee identifier"),
) -> int:
    """
    Path dependency turning the raw `{employee_id}` segment into an int.

    The segment is taken as a string so that anything other than a
    positive base-10 integer produces our 400 body instead of FastAPI's 422.
    Values beyond the BIGINT range are rejected here, before any SQL runs.
    """
    if (
        not (employee_id.isascii() and employee_id.isdigit())
        or len(employee_id) > MAX_ID_DIGITS
        or not 0 < int(employee_id) <= MAX_EMPLOYEE_ID
    ):
        raise ValidationError(
            message="Invalid employee ID",
            field="employee_id",
            context={"value": employee_id[:64]},
        )
    return int(employee_id)


@router.post(
    "/create",
    status_code=201,
    response_model=EmployeeResponse,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create an employee record",
)
async def create_employee(
    payload: EmployeeCreate,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    """Insert a new record; the identifier and both timestamps are server-assigned."""
    employee = await employee_store.create(db, payload.model_dump())
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/find/{employee_id}",
    response_model=EmployeeResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get one employee record by ID",
)
async def find_employee(
    record_id: int = Depends(parse_employee_id),
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    employee = await employee_store.find_by_id(db, record_id)
    return EmployeeResponse.model_validate(employee)


@router.api_route(
    "/update/{employee_id}",
    methods=["PUT", "PATCH"],
    response_model=StatusResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace every mutable field of an employee record",
)
async def update_employee(
    payload: EmployeeUpdate,
    record_id: int = Depends(parse_employee_id),
    db: AsyncSession = Depends(get_db_session),
) -> StatusResponse:
    """
    Full replacement: PUT and PATCH both require every mutable field.

    Zero rows affected means the ID does not exist and is reported as 404.
    """
    updated_rows = await employee_store.update(db, record_id, payload.model_dump())
    if updated_rows == 0:
        raise NotFoundError(resource="Employee", resource_id=record_id)
    return StatusResponse(status="success", message="Employee updated successfully")


@router.delete(
    "/delete/{employee_id}",
    response_model=StatusResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete an employee record",
)
async def delete_employee(
    record_id: int = Depends(parse_employee_id),
    db: AsyncSession = Depends(get_db_session),
) -> StatusResponse:
    """
    Hard delete. Repeating the call for the same ID returns 404, so a
    second logical deletion never reports success.
    """
    deleted_rows = await employee_store.delete(db, record_id)
    if deleted_rows == 0:
        raise NotFoundError(resource="Employee", resource_id=record_id)
    return StatusResponse(status="success", message="Employee deleted successfully")


@router.get(
    "/findall",
    response_model=List[EmployeeResponse],
    responses={**_SERVER_ERROR},
    summary="List every employee record",
)
async def find_all_employees(
    db: AsyncSession = Depends(get_db_session),
) -> List[EmployeeResponse]:
    employees = await employee_store.find_all(db)
    return [EmployeeResponse.model_validate(e) for e in employees]
