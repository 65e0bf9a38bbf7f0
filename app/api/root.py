from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Employee Registry",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "employees": "/api/employees",
    }
