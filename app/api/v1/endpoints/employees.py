"""
Employee Endpoints Module

This module provides the minimal employee and category administration the task
board needs: listing for every authenticated employee, creation for admins.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select
from app.api import deps
from app.core.errors import InvalidRequest, NotFound
from app.core.security import get_password_hash
from app.db.session import get_db
from app.models.employee import Category, Employee
from app.schemas.employee import (
    CategoryCreate, CategoryListResponse, CategoryRead, CategoryResponse,
    EmployeeCreate, EmployeeListResponse, EmployeeRead, EmployeeResponse,
)

router = APIRouter()
category_router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    employees = db.exec(select(Employee).order_by(Employee.id)).all()
    return EmployeeListResponse(employees=[EmployeeRead.model_validate(e) for e in employees])


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    employee_in: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_admin),
):
    """
    Create an employee. Passwords are hashed before storage.

    Raises:
        InvalidRequest: If an employee with this email already exists
        NotFound: If ``category_id`` does not reference an existing category
    """
    if db.exec(select(Employee).where(Employee.email == employee_in.email)).first():
        raise InvalidRequest("An employee with this email already exists")
    if employee_in.category_id is not None and db.get(Category, employee_in.category_id) is None:
        raise NotFound("Category not found")

    employee = Employee(
        **employee_in.model_dump(exclude={"password"}),
        password=get_password_hash(employee_in.password),
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return EmployeeResponse(employee=EmployeeRead.model_validate(employee))


@category_router.get("", response_model=CategoryListResponse)
def list_categories(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    categories = db.exec(select(Category).order_by(Category.id)).all()
    return CategoryListResponse(categories=[CategoryRead.model_validate(c) for c in categories])


@category_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_admin),
):
    if db.exec(select(Category).where(Category.name == category_in.name)).first():
        raise InvalidRequest("Category already exists")

    category = Category(name=category_in.name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return CategoryResponse(category=CategoryRead.model_validate(category))
