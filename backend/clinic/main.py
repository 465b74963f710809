import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from clinic.config import get_settings
from clinic.database import engine, Base
from clinic.auth import get_current_user
from clinic.exceptions import NotAuthenticatedError
from clinic.middleware.request_logging import RequestLoggingMiddleware, NoCacheMiddleware
from clinic.routers import admissions, appointments, dashboard, doctors, drugs, patients, search
from clinic.routers import auth as auth_router
import clinic.models  # noqa: F401  registers tables on Base.metadata

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready")
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Clinic Management API",
    description="Patients, doctors, drugs, appointments and admissions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(NoCacheMiddleware)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path")),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Validation error", "errors": errors})


@app.exception_handler(NotAuthenticatedError)
async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    return JSONResponse(
        status_code=401,
        content={"detail": "Unauthorized", "loginUrl": exc.login_url},
        headers={"Location": exc.login_url},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


authenticated = [Depends(get_current_user)]

app.include_router(auth_router.router, prefix="/api", tags=["Auth"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=authenticated)
app.include_router(patients.router, prefix="/api/patients", tags=["Patients"], dependencies=authenticated)
app.include_router(doctors.router, prefix="/api/doctors", tags=["Doctors"], dependencies=authenticated)
app.include_router(drugs.router, prefix="/api/drugs", tags=["Drugs"], dependencies=authenticated)
app.include_router(appointments.router, prefix="/api/appointments", tags=["Appointments"], dependencies=authenticated)
app.include_router(admissions.router, prefix="/api/admissions", tags=["Admissions"], dependencies=authenticated)
app.include_router(search.router, prefix="/api/search", tags=["Search"], dependencies=authenticated)


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "clinic-api"}
