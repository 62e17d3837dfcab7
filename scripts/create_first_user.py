import sys
import os
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from app.db.session import engine, init_db
from app.models.employee import Employee, EmployeeRole
from app.core.security import get_password_hash

def create_initial_admin():
    print("--- Initial Admin Creation ---")

    email = os.environ.get("ADMIN_EMAIL", "admin@example.com")
    password = os.environ.get("ADMIN_PASSWORD", "adminpassword")
    name = "Administrator"

    init_db()

    with Session(engine) as session:
        # Check if employee already exists
        statement = select(Employee).where(Employee.email == email)
        employee = session.exec(statement).first()

        if employee:
            print(f"Employee with email {email} already exists.")
            return

        print(f"Creating admin {email}...")
        db_employee = Employee(
            name=name,
            email=email,
            password=get_password_hash(password),
            role=EmployeeRole.ADMIN,
        )
        session.add(db_employee)
        session.commit()
        print("Initial admin created successfully!")
        print(f"Email: {email}")
        print(f"Role: {EmployeeRole.ADMIN.value}")

if __name__ == "__main__":
    create_initial_admin()
