from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeCreate(CamelModel):
    number: str = Field(min_length=1, description="Employee number, unique")
    name: str = Field(min_length=1)


class EmployeeUpdate(CamelModel):
    name: str = Field(min_length=1)
    new_number: str | None = Field(default=None, description="Rename to this number; blank keeps the current one")


class EmployeeOut(CamelModel):
    id: int
    number: str
    name: str
    created_at: datetime
    updated_at: datetime


class EmployeeEnvelope(BaseModel):
    employee: EmployeeOut


class EmployeeList(BaseModel):
    employees: list[EmployeeOut]


class DeleteResult(BaseModel):
    status: Literal["deleted"] = "deleted"


class ErrorOut(BaseModel):
    error: str
