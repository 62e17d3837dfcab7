"""
Employee Model Module

This module defines the Employee and Category models along with the EmployeeRole
enumeration used for authentication and authorization throughout the application.
Employees double as login identities: the access token subject is the employee email.
"""
from enum import Enum
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field, AutoString

from app.models.base import UTCDateTime, utcnow


class EmployeeRole(str, Enum):
    """
    Permission levels in the system.

    - EMPLOYEE: sees tasks and updates task status (default role)
    - MANAGER: manages projects, tasks and clients
    - ADMIN: everything a manager can do, plus employee and category administration
    """
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class Category(SQLModel, table=True):
    """
    Named role bucket (e.g. "Developer", "Designer"). Many employees reference one category.
    """
    __tablename__ = "category"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, unique=True)


class Employee(SQLModel, table=True):
    """
    Employee model representing staff members and login identities.

    Employees are referenced by task_assignments and clock_records and are never
    removed implicitly when those rows go away.

    Attributes:
        id: Auto-incrementing primary key; also the suffix of the employee's live channel (user_<id>)
        name: Display name shown next to assigned tasks
        email: Login email (required, unique, indexed)
        password: Hashed password (bcrypt)
        role: EmployeeRole value determining permissions
        category_id: Foreign key to the employee's Category
        salary: Monthly salary in the smallest currency unit
        address: Postal address
        created_at: Timestamp when the employee record was created
    """
    __tablename__ = "employee"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Identity
    name: str = Field(nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    password: Optional[str] = None  # Hashed password (bcrypt)

    # Authorization
    role: EmployeeRole = Field(default=EmployeeRole.EMPLOYEE, sa_type=AutoString)

    # Relationships
    category_id: Optional[int] = Field(default=None, foreign_key="category.id")

    # Profile information
    salary: Optional[int] = None
    address: Optional[str] = None

    # Audit timestamp
    created_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)

    @property
    def is_privileged(self) -> bool:
        """Helper to check if the employee may manage projects and tasks."""
        return self.role in (EmployeeRole.ADMIN, EmployeeRole.MANAGER)

    @property
    def is_admin(self) -> bool:
        return self.role == EmployeeRole.ADMIN
