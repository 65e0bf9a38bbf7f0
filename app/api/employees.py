from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from app.api.deps import get_employee_repository, require_store
from app.models.employee import Employee
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import (
    DeleteResult,
    EmployeeCreate,
    EmployeeEnvelope,
    EmployeeList,
    EmployeeOut,
    EmployeeUpdate,
    ErrorOut,
)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(require_store)],
    responses={500: {"model": ErrorOut}},
)


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def employee_to_out(e: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=e.id,
        number=e.number,
        name=e.name,
        created_at=as_utc(e.created_at),
        updated_at=as_utc(e.updated_at),
    )


@router.post(
    "",
    response_model=EmployeeEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}},
)
def create_employee(
    payload: EmployeeCreate,
    repo: EmployeeRepository = Depends(get_employee_repository),
):
    employee = repo.create(payload.number, payload.name)
    return EmployeeEnvelope(employee=employee_to_out(employee))


@router.get("", response_model=EmployeeList)
def list_employees(repo: EmployeeRepository = Depends(get_employee_repository)):
    """
    List every employee, newest first.
    """
    return EmployeeList(employees=[employee_to_out(e) for e in repo.list_all()])


@router.put(
    "/{number}",
    response_model=EmployeeEnvelope,
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 409: {"model": ErrorOut}},
)
def update_employee(
    number: str,
    payload: EmployeeUpdate,
    repo: EmployeeRepository = Depends(get_employee_repository),
):
    """
    Update the name of the employee currently holding `number`.

    Pass `newNumber` to rename; omit it (or send it blank) to keep the number.
    """
    employee = repo.update(number, payload.name, payload.new_number)
    return EmployeeEnvelope(employee=employee_to_out(employee))


@router.delete(
    "/{number}",
    response_model=DeleteResult,
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}},
)
def delete_employee(
    number: str,
    repo: EmployeeRepository = Depends(get_employee_repository),
):
    repo.delete(number)
    return DeleteResult()
