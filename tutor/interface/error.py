"""Translation of domain errors into HTTP responses.

Each domain error kind maps to exactly one status code. Anything that is
not a DomainError is left to FastAPI and surfaces as a 500.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tutor.domain.error import (
    ConflictError,
    DomainError,
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from tutor.persistence.transaction import Transaction

ERROR_STATUS: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    RateLimitExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidStateError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(error: DomainError) -> int:
    """Find the HTTP status for a domain error by its kind."""
    for kind in type(error).__mro__:
        if kind in ERROR_STATUS:
            return ERROR_STATUS[kind]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"detail": ..., "error": ...}``.

    The request's transaction is rolled back first: the response is
    produced inside the request container, which would otherwise commit
    whatever the failed operation had already written.
    """
    await rollback_request_transaction(request)

    status_code = status_for(exc)
    headers = None
    if isinstance(exc, RateLimitExceededError) and exc.retry_after is not None:
        headers = {"Retry-After": str(exc.retry_after)}

    logfire.info(
        "Domain error response",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
        headers=headers,
    )


async def rollback_request_transaction(request: Request) -> None:
    container = getattr(request.state, "dishka_container", None)
    if container is None:
        return
    transaction = await container.get(Transaction)
    await transaction.rollback()


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
