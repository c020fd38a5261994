from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

class DomainError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class NotFound(DomainError):
    status_code = 404

    def __init__(self, entity: str, identifier: object, detail: str | None = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(detail or f"{entity} with id {identifier} not found")

class IntegrityViolation(DomainError):
    status_code = 422

class Conflict(DomainError):
    status_code = 409

def _domain_error(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

def _integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=422, content={"detail": "Data integrity violation"})

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _domain_error)
    app.add_exception_handler(IntegrityError, _integrity_error)
