"""Record store for employees."""

import logging

from sqlalchemy import delete, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, StoreUnavailableError, ValidationError
from app.models.employee import Employee, utcnow

logger = logging.getLogger(__name__)

DUPLICATE_NUMBER = "Employee number already exists."


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


class EmployeeRepository:
    """Insert, list, update and delete employees keyed on their unique number.

    Every mutating call commits its own transaction. Uniqueness violations
    become ConflictError; other database failures are logged and surfaced as
    StoreUnavailableError with a generic message.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, operation: str, key: str | None, exc: Exception, message: str) -> StoreUnavailableError:
        self.db.rollback()
        logger.error("Employee %s failed for number=%r: %s", operation, key, exc, exc_info=exc)
        return StoreUnavailableError(message)

    def ping(self) -> None:
        try:
            self.db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def create(self, number: str, name: str) -> Employee:
        """Insert a new employee.

        Raises:
            ValidationError: number or name is blank.
            ConflictError: number is already taken.
        """
        number, name = _clean(number), _clean(name)
        if not number or not name:
            raise ValidationError("Both employee number and name are required.")

        now = utcnow()
        employee = Employee(number=number, name=name, created_at=now, updated_at=now)
        self.db.add(employee)
        try:
            self.db.flush()
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_NUMBER)
        except SQLAlchemyError as exc:
            raise self._fail("create", number, exc, "Failed to save employee record. See server logs for details.")

        self.db.refresh(employee)
        logger.info("Created employee id=%s number=%s", employee.id, employee.number)
        return employee

    def list_all(self) -> list[Employee]:
        """All employees, newest first."""
        try:
            return list(
                self.db.scalars(
                    select(Employee).order_by(Employee.created_at.desc(), Employee.id.desc())
                ).all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("list", None, exc, "Unable to load employees right now.")

    def get_by_number(self, number: str) -> Employee | None:
        return self.db.scalars(select(Employee).where(Employee.number == number)).one_or_none()

    def update(self, current_number: str, name: str, new_number: str | None = None) -> Employee:
        """Set the name and optionally rename; updated_at is always refreshed.

        A blank new_number keeps the current one.

        Raises:
            ValidationError: current_number or name is blank.
            NotFoundError: no employee has current_number.
            ConflictError: the resulting number belongs to another employee.
        """
        current_number, name = _clean(current_number), _clean(name)
        if not current_number:
            raise ValidationError("Employee number is required.")
        if not name:
            raise ValidationError("Employee name is required.")
        next_number = _clean(new_number) or current_number

        try:
            employee = self.db.scalars(
                select(Employee).where(Employee.number == current_number).with_for_update()
            ).one_or_none()
            if employee is None:
                self.db.rollback()
                raise NotFoundError("Employee not found.")

            employee.number = next_number
            employee.name = name
            employee.updated_at = utcnow()
            self.db.flush()
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_NUMBER)
        except SQLAlchemyError as exc:
            raise self._fail("update", current_number, exc, "Failed to update employee. See server logs for details.")

        self.db.refresh(employee)
        if next_number != current_number:
            logger.info("Renamed employee id=%s number=%s -> %s", employee.id, current_number, next_number)
        else:
            logger.info("Updated employee id=%s number=%s", employee.id, current_number)
        return employee

    def delete(self, number: str) -> None:
        """Permanently remove the employee with this number.

        Raises:
            ValidationError: number is blank.
            NotFoundError: no employee has this number.
        """
        number = _clean(number)
        if not number:
            raise ValidationError("Employee number is required.")

        try:
            result = self.db.execute(delete(Employee).where(Employee.number == number))
            if result.rowcount == 0:
                self.db.rollback()
                raise NotFoundError("Employee not found.")
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", number, exc, "Failed to delete employee. See server logs for details.")

        logger.info("Deleted employee number=%s", number)
