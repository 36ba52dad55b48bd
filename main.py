import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.security import SecurityConfig
from app.config.settings import settings
from app.database import Base, engine
from app.routers import auth, tasks
from app.utils.logger import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables when the application starts"""
    logger.info("Starting Task API...")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Shutting down Task API...")


app = FastAPI(title="Task API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Received {request.method} request to {request.url.path}")
    response = await call_next(request)
    SecurityConfig.apply(response.headers)
    return response


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    message = str(error.get("msg", "Invalid request"))
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    # Rendered by the outermost error middleware, outside log_requests
    response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
    SecurityConfig.apply(response.headers)
    return response


# Route registration
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])


# Root route
@app.get("/")
def read_root():
    return {"message": "Task API"}


@app.get("/health")
def health():
    return {"status": "ok"}
