from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.repositories.employee_repository import EmployeeRepository


def create_employee(db: Session, number: str, name: str) -> Employee:
    return EmployeeRepository(db).create(number, name)


def count_employees(db: Session) -> int:
    db.expire_all()
    return db.query(Employee).count()
