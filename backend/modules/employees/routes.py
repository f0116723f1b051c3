"""
Employee account API endpoints.

Owners manage the employee accounts that can sign in with shadow sessions.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_container
from api.middleware.console_session import require_owner
from modules.auth.registry import ConsoleSession

from .interfaces import IEmployeeService
from .models import CreateEmployeeRequest, EmployeeAccount, EmployeeListResponse

router = APIRouter()


def get_employee_service(
    console: ConsoleSession = Depends(require_owner),
) -> IEmployeeService:
    """FastAPI dependency for an employee service acting as the signed-in owner."""
    return get_container().employees_for(console.facade.session.access_token)


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    console: ConsoleSession = Depends(require_owner),
    service: IEmployeeService = Depends(get_employee_service),
) -> EmployeeListResponse:
    """
    List the owner's employees, newest first.
    """
    return await service.list_employees(console.facade.user.id)


@router.post("", response_model=EmployeeAccount, status_code=201)
async def create_employee(
    request: CreateEmployeeRequest,
    console: ConsoleSession = Depends(require_owner),
    service: IEmployeeService = Depends(get_employee_service),
) -> EmployeeAccount:
    """
    Create an employee account.

    The new employee can then sign in with their username; creating the
    account does not sign anyone in.
    """
    return await service.create_employee(console.facade.user.id, request)


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: str,
    console: ConsoleSession = Depends(require_owner),
    service: IEmployeeService = Depends(get_employee_service),
) -> None:
    """
    Revoke an employee account.
    """
    await service.delete_employee(console.facade.user.id, employee_id)
