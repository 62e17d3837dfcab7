from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth, health, employees,
    clients, projects, tasks, task_status, notifications, attendance
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(employees.category_router, prefix="/categories", tags=["employees"])

# Resource endpoints
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(task_status.router, prefix="/taskstatus", tags=["tasks"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
