import logging
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import router as auth_router
from budgeting import router as budgeting_router
from core import applog, db, envelope, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the audit log and DB pool once per process.
    applog.configure()
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()
        applog.shutdown()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def assign_job_id(request: Request, call_next):
    request.state.job_id = uuid4().hex
    response = await call_next(request)
    response.headers[envelope.JOB_ID_HEADER] = request.state.job_id
    return response


def validation_message(exc: RequestValidationError) -> str:
    """
    Client-facing text for a request that failed decoding or field rules.
    """
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc and loc[0] == "path":
            return "invalid ID"
        if error.get("type") == "value_error":
            cause = (error.get("ctx") or {}).get("error")
            if cause is not None:
                return str(cause)
            return str(error.get("msg", "")).removeprefix("Value error, ")
    return "invalid data request"


@app.exception_handler(envelope.ApiError)
async def handle_api_error(request: Request, exc: envelope.ApiError):
    return envelope.error_response(request, exc.status_code, exc.message, detail=exc.detail)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return envelope.error_response(
        request,
        400,
        validation_message(exc),
        detail=str(exc.errors()),
        body=exc.body,
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = "Page Not found"
    elif exc.status_code == 405:
        message = "Method Not Allowed"
    else:
        message = str(exc.detail)
    return envelope.error_response(request, exc.status_code, message)


async def handle_database_error(request: Request, exc: Exception):
    logger.error("database_error path=%s error=%r", request.url.path, exc)
    return envelope.error_response(request, 500, "database error", detail=repr(exc))


for _error_type in db.DATABASE_ERRORS:
    app.add_exception_handler(_error_type, handle_database_error)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    # Starlette re-raises the exception once this response is sent.
    logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
    return envelope.error_response(request, 500, "internal error", detail=repr(exc))


app.include_router(auth_router.router, tags=["auth"])
for _router in budgeting_router.routers:
    app.include_router(_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "budget back-office api"}
