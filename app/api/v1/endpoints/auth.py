"""
Authentication Endpoints Module

Login, logout and token verification. Login issues a JWT both in the response
body (for API clients) and as an HTTP-only cookie (for browser clients).
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select
from datetime import timedelta
from app.api import deps
from app.db.session import get_db
from app.models.employee import Employee, EmployeeRole
from app.core.security import verify_password, create_access_token
from app.core.config import settings
from app.schemas.auth import Token, VerifyResponse

router = APIRouter()


@router.post("/login", response_model=Token)
def login(response: Response, db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Authenticate an employee and issue an access token.

    Note: OAuth2PasswordRequestForm uses the 'username' field; it carries the email.

    Raises:
        HTTPException 401: If credentials are invalid
    """
    employee = db.exec(select(Employee).where(Employee.email == form_data.username)).first()

    if not employee or not verify_password(form_data.password, employee.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        subject=employee.email, role=EmployeeRole(employee.role).value, expires_delta=access_token_expires
    )

    # httponly keeps the cookie away from scripts; samesite="lax" for CSRF
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax"
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/logout")
def logout():
    """
    Clear the authentication cookie. API clients can simply discard their token.
    """
    response = JSONResponse({"success": True, "message": "Logged out"})
    response.delete_cookie("access_token")
    return response


@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: Employee = Depends(deps.get_current_active_user)):
    """Identity and role behind the presented token."""
    return VerifyResponse(id=current_user.id, role=EmployeeRole(current_user.role).value)
