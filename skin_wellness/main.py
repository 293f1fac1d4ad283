import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

# IMPORT ROUTERS
from skin_wellness.config import settings
from skin_wellness.core.error_handlers import domain_exception_handler, validation_exception_handler
from skin_wellness.core.exceptions import SkinWellnessException
from skin_wellness.core.logging import configure_logging
from skin_wellness.routers.categories import router as categories_router
from skin_wellness.routers.chart import router as chart_router
from skin_wellness.routers.diagnostics import router as diagnostics_router
from skin_wellness.routers.health import router as health_router
from skin_wellness.routers.scoring import router as scoring_router

logger = logging.getLogger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Categories"},
    {"name": "Scoring"},
    {"name": "Chart"},
    {"name": "Diagnostics"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SkinWellnessException, domain_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)        # Health
app.include_router(categories_router)    # Categories
app.include_router(scoring_router)       # Scoring
app.include_router(chart_router)         # Chart
app.include_router(diagnostics_router)   # Diagnostics


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging(settings)
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.APP_ENV)
    logger.info("Swagger UI available at: http://localhost:8000/docs")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down %s", settings.APP_NAME)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "skin_wellness.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
