from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from app.models.employee import EmployeeRole


# Properties to receive via API on creation
class EmployeeCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    role: EmployeeRole = EmployeeRole.EMPLOYEE
    category_id: Optional[int] = None
    salary: Optional[int] = None
    address: Optional[str] = None


# Properties to return to client
class EmployeeRead(BaseModel):
    id: int
    name: str
    email: str
    role: EmployeeRole
    category_id: Optional[int] = None
    salary: Optional[int] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EmployeeResponse(BaseModel):
    success: bool = True
    employee: EmployeeRead


class EmployeeListResponse(BaseModel):
    success: bool = True
    employees: List[EmployeeRead]


# Assignee picker entry: role is the employee's category name
class AssignableEmployee(BaseModel):
    id: int
    name: str
    role: Optional[str] = None


class AssignableEmployeeListResponse(BaseModel):
    success: bool = True
    employees: List[AssignableEmployee]


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)


class CategoryRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(BaseModel):
    success: bool = True
    category: CategoryRead


class CategoryListResponse(BaseModel):
    success: bool = True
    categories: List[CategoryRead]
