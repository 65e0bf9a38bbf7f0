from app.core.errors import ConflictError
from app.core.logging import configure_logging
from app.db.init import ensure_store_ready
from app.db.session import SessionLocal
from app.repositories.employee_repository import EmployeeRepository

DEMO_EMPLOYEES = [
    ("EMP-001", "Ada Lovelace"),
    ("EMP-002", "Grace Hopper"),
    ("EMP-003", "Alan Turing"),
]


def upsert_employee(repo: EmployeeRepository, number: str, name: str):
    existing = repo.get_by_number(number)
    if existing:
        return existing
    try:
        return repo.create(number, name)
    except ConflictError:
        # inserted concurrently
        return repo.get_by_number(number)


def main():
    configure_logging()
    ensure_store_ready()
    db = SessionLocal()
    try:
        repo = EmployeeRepository(db)
        seeded = [upsert_employee(repo, number, name) for number, name in DEMO_EMPLOYEES]

        print("Seeded employees:")
        for e in seeded:
            print(e.id, e.number, e.name)
    finally:
        db.close()

if __name__ == "__main__":
    main()
