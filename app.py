import sys
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from config import ACCOUNTS_TABLE, LOG_LEVEL
from database import get_db, init_db
from errors import AccountError, StorageError, ValidationError
from recommendations import list_mentors, load_jobs
from schemas import LoginRequest, SignupRequest
from store import AccountStore
from validators import validate_login, validate_registration


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Tables are created if missing; older schema versions are left alone.
    init_db()
    logger.info("Skill Bridge started, accounts table {}", ACCOUNTS_TABLE)
    yield


app = FastAPI(title="Skill Bridge", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log request timing and status"""
    start_time = time.time()
    response = await call_next(request)
    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Duration: {(time.time() - start_time):.3f}s"
    )
    return response


def failure(exc: AccountError) -> JSONResponse:
    """Uniform ``{success: false, message}`` body for any account failure."""
    return JSONResponse(
        {"success": False, "message": exc.message},
        status_code=exc.status_code,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Malformed body on {}: {}", request.url.path, exc.errors())
    return failure(ValidationError("Invalid request body"))


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return failure(exc)


@app.get("/health")
def health_check():
    return {"status": "healthy"}


# ---------------- Login ----------------

@app.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Check a username/password pair and echo the account back.

    Payload:
        {"username": "...", "password": "..."}
    """
    try:
        validate_login(payload.username, payload.password)
        user = AccountStore(db).login(payload.username, payload.password)
    except AccountError as exc:
        return failure(exc)
    return JSONResponse({"success": True, "user": user})


# ---------------- Registration ----------------

@app.post("/signup")
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    """
    Validate a signup form and create the account.

    ``skills`` is a JSON-encoded array of strings; ``role`` defaults to
    "student".
    """
    try:
        form = payload.to_form()
        validate_registration(form)
        user = AccountStore(db).register(form)
    except AccountError as exc:
        return failure(exc)
    return JSONResponse({"success": True, "user": user})


# ---------------- Recommendations ----------------

@app.get("/mentors")
def mentors(db: Session = Depends(get_db)):
    """Profiles of registered mentors."""
    return list_mentors(db)


@app.get("/jobs")
def jobs():
    """Open job postings."""
    return load_jobs()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=False)
