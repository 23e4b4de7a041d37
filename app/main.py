from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import (
    ConflictError,
    LedgerError,
    NotFoundError,
    ValidationError,
    INVALID_AMOUNT,
    INVALID_FIELD,
)
from app.core.logging_setup import configure_logging, get_logger
from app.db.session import open_store, close_store
from app.api.v1.api import api_router

configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    await open_store()
    yield
    await close_store()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    status_code = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_400_BAD_REQUEST
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code}
    )

def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc if part not in ("body", "query", "path"))

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and params answer like a ValidationError."""
    errors = exc.errors()
    fields = [_field_name(error.get("loc", ())) for error in errors]
    code = INVALID_AMOUNT if any(field.endswith("_cents") for field in fields) else INVALID_FIELD
    detail = "; ".join(
        f"{field}: {error.get('msg', 'invalid value')}" if field else error.get("msg", "invalid value")
        for field, error in zip(fields, errors)
    )
    logger.warning("Rejected %s %s (%s): %s", request.method, request.url.path, code, detail)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "code": code}
    )

@app.get("/")
async def root():
    return {"message": "Welcome to Finance Manager API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
