"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio.app.api.v1 import auth, public, resume_profiles
from portfolio.app.api.v1.admin import media_router, ordering_router, projects_router, site_config_router
from portfolio.app.core.config import settings
from portfolio.app.core.logging_config import get_logger, setup_logging
from portfolio.app.db.base import Base
from portfolio.app.db.session import engine
from portfolio.app.services.rate_limiter import RateLimiter
from portfolio.app.utils import cache

# Import models so they register with Base.metadata
import portfolio.app.models  # noqa: F401

setup_logging()
logger = get_logger("main")

# Create database tables
try:
    Base.metadata.create_all(bind=engine)
except Exception as e:
    logger.error("Database error: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one limiter per process; workers do not share cooldowns
    app.state.resume_rate_limiter = RateLimiter(settings.resume_rate_limit_ms)
    await cache.connect()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield
    await cache.close()


# Initialize FastAPI app
app = FastAPI(
    title="Portfolio API",
    description="Bilingual portfolio site, admin content management and resume builder API",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

RESUME_PROFILES_PATH = "/api/resume-profiles"

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(resume_profiles.router, prefix=RESUME_PROFILES_PATH, tags=["resume-profiles"])
app.include_router(public.router, prefix="/api/public", tags=["public"])
app.include_router(projects_router, prefix="/api/admin/projects", tags=["admin"])
app.include_router(site_config_router, prefix="/api/admin/site-config", tags=["admin"])
app.include_router(media_router, prefix="/api/admin/media", tags=["admin"])
app.include_router(ordering_router, prefix="/api/admin/order", tags=["admin"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Resume profile clients branch on detail.error, so badly typed bodies there are 400 invalid_request."""
    if not request.url.path.startswith(RESUME_PROFILES_PATH):
        return await request_validation_exception_handler(request, exc)
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()]
    logger.info("Resume profile request rejected path=%s fields=%s", request.url.path, fields)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "error": "invalid_request",
                "message": f"Invalid field(s): {', '.join(f for f in fields if f) or 'body'}",
            }
        },
    )


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": "Portfolio API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
