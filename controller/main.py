"""Entry point for the Controller service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.exceptions import (
    ReplicationException,
    MalformedRequestError,
    ValidationFailureError,
    TruncatedOrCorruptError,
    AutoFollowPatternExistsError,
    AutoFollowPatternNotFoundError
)
from common.logging_config import setup_logging
from controller.config import CONTROLLER_HOST, CONTROLLER_PORT, CONTROLLER_RELOAD
from controller.routes.autofollow_routes import router as autofollow_router

logger = setup_logging('controller')

app = FastAPI(
    title="Replication Controller",
    description="Admission endpoint for cross-cluster auto-follow patterns",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.exception_handler(MalformedRequestError)
async def malformed_request_handler(request: Request, exc: MalformedRequestError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Malformed request: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "MALFORMED_REQUEST"}
    )


@app.exception_handler(ValidationFailureError)
async def validation_failure_handler(request: Request, exc: ValidationFailureError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Validation failed: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "VALIDATION_FAILED", "errors": exc.errors}
    )


@app.exception_handler(AutoFollowPatternExistsError)
async def pattern_exists_handler(request: Request, exc: AutoFollowPatternExistsError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Pattern exists: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "PATTERN_EXISTS"}
    )


@app.exception_handler(AutoFollowPatternNotFoundError)
async def pattern_not_found_handler(request: Request, exc: AutoFollowPatternNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Pattern not found: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "code": "PATTERN_NOT_FOUND"}
    )


@app.exception_handler(TruncatedOrCorruptError)
async def corrupt_payload_handler(request: Request, exc: TruncatedOrCorruptError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Corrupt forwarded payload: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "CORRUPT_PAYLOAD"}
    )


@app.exception_handler(ReplicationException)
async def replication_exception_handler(request: Request, exc: ReplicationException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Replication exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


app.include_router(autofollow_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "Replication Controller API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container healthchecks.
    """
    return {"status": "healthy", "service": "controller"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "controller.main:app",
        host=CONTROLLER_HOST,
        port=CONTROLLER_PORT,
        reload=CONTROLLER_RELOAD
    )


if __name__ == "__main__":
    main()
