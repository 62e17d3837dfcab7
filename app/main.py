import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import configure_logging
from app.api.v1.api import api_router
from app.db.session import init_db
from app.realtime.channels import ChannelRegistry
from app.realtime.router import router as realtime_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.AUTO_CREATE_TABLES:
        init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Per-employee live rooms, shared by the WebSocket endpoint and the task notifier
app.state.channels = ChannelRegistry()

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def failure(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message}, headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return failure(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        # loc is ("body", "field", ...) or ("query", "field")
        name = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        if name not in fields:
            fields.append(name)
    return failure(status.HTTP_400_BAD_REQUEST, f"Missing or invalid fields: {', '.join(fields)}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return failure(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    # Detail stays in the log; clients get the generic message
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


# Include API routes separately
app.include_router(api_router, prefix=settings.API_V1_STR)

# Live channel
app.include_router(realtime_router)
