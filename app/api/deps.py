from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.init import ensure_store_ready
from app.db.session import get_db
from app.repositories.employee_repository import EmployeeRepository


def require_store() -> None:
    """Hosts that skip the startup hook still get the one-time initialization."""
    ensure_store_ready()


def get_employee_repository(db: Session = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)
