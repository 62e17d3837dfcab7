"""
API Dependencies Module

This module provides FastAPI dependency functions for authentication, authorization
and service wiring. Authentication supports both bearer tokens (for API clients)
and HTTP-only cookies (for browser clients). Services receive their session and
publisher through these dependencies rather than importing process-wide handles.
"""
from typing import List, Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import ValidationError
from sqlmodel import Session, select

from app.core.config import settings
from app.db.session import get_db
from app.models.employee import Employee, EmployeeRole
from app.schemas.auth import TokenData
from app.services.assignments import AssignmentEngine
from app.services.notifier import TaskNotifier

# auto_error=False allows us to check cookies as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False  # Don't raise error immediately if Authorization header is missing
)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2)
) -> Employee:
    """
    Dependency that retrieves and validates the current authenticated employee.

    The bearer token in the Authorization header wins; the access_token cookie
    is the fallback for browser clients.

    Raises:
        HTTPException 401: If no authentication token is provided
        HTTPException 403: If the token is invalid or expired
        HTTPException 404: If the employee referenced in the token doesn't exist
    """
    if not token:
        token = request.cookies.get("access_token")
        # Cookie format is "Bearer <token>"
        if token and token.startswith("Bearer "):
            token = token.replace("Bearer ", "")

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not Authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        token_data = TokenData(email=payload.get("sub"))
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid Token",
        )

    employee = db.exec(select(Employee).where(Employee.email == token_data.email)).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


def get_current_active_user(
    current_user: Employee = Depends(get_current_user),
) -> Employee:
    """Dependency that requires any authenticated employee."""
    return current_user


class RoleChecker:
    """
    Dependency factory for checking employee roles.

    Usage: Depends(RoleChecker([EmployeeRole.ADMIN, EmployeeRole.MANAGER]))
    """
    def __init__(self, allowed_roles: List[EmployeeRole]):
        self.allowed_roles = allowed_roles

    def __call__(self, current_user: Employee = Depends(get_current_active_user)) -> Employee:
        if current_user.role not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access Denied",
            )
        return current_user


require_manager = RoleChecker([EmployeeRole.ADMIN, EmployeeRole.MANAGER])
require_admin = RoleChecker([EmployeeRole.ADMIN])


def get_assignment_engine(db: Session = Depends(get_db)) -> AssignmentEngine:
    return AssignmentEngine(db)


def get_notifier(request: Request) -> TaskNotifier:
    """Task notifier bound to the application's channel registry."""
    return TaskNotifier(request.app.state.channels)
