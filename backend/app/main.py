# BizLedger backend entrypoint: payments API on FastAPI.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api import login
from backend.app.api import payments
from backend.app.api import register
from backend.app.core.dev_seed import ensure_dev_reference_data
from backend.app.core.errors import PaymentError, ServerFaultError
from backend.app.core.logging_config import configure_logging
from backend.app.core.settings import get_settings
from backend.app.db.session import SessionLocal, init_db

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(payments.router)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    if isinstance(exc, ServerFaultError):
        logger.error("Server fault", extra={"path": request.url.path, "reason": exc.message})
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error", "errors": []})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "errors": [violation.as_dict() for violation in exc.violations]},
    )


@app.get("/")
def read_root():
    return {"app": "BizLedger backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def prepare_database():
    init_db()
    db = SessionLocal()
    try:
        ensure_dev_reference_data(db)
    finally:
        db.close()
