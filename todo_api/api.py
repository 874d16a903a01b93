from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlmodel import Session

from .database import ensure_schema, get_session
from .errors import AuthenticationError, NotFoundError, ValidationError
from .identifiers import InvalidObjectIdError
from .routers import todos, users

logger = logging.getLogger(__name__)

app = FastAPI(title="Todo API")
app.include_router(todos.router)
app.include_router(users.router)

__all__ = ["app", "get_session"]


@app.on_event("startup")
def on_startup():
    ensure_schema()


@app.exception_handler(ValidationError)
def handle_validation_error(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400, content={"detail": exc.message, "errors": exc.errors}
    )


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors[".".join(loc) or "body"] = err.get("msg", "invalid")
    return JSONResponse(
        status_code=400, content={"detail": "Invalid request body", "errors": errors}
    )


@app.exception_handler(InvalidObjectIdError)
def handle_invalid_object_id(request: Request, exc: InvalidObjectIdError):
    logger.warning("Malformed id in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=404, content={"detail": "Not found"})


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError):
    logger.warning("%s: %s %s", exc.message, request.method, request.url.path)
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
def handle_authentication_error(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health(session: Session = Depends(get_session)):
    """Ensure the API and database are reachable."""
    session.connection().execute(text("SELECT 1"))
    return {"api": "ok", "db": "ok"}
