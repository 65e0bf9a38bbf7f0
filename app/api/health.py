import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import get_employee_repository
from app.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(repo: EmployeeRepository = Depends(get_employee_repository)):
    # Simple DB ping
    try:
        repo.ping()
    except SQLAlchemyError:
        logger.exception("Health check failed")
        return JSONResponse(status_code=500, content={"status": "error", "error": "Database unreachable."})
    return {"status": "ok"}
