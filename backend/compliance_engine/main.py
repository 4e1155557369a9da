import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from compliance_engine.config import settings
from compliance_engine.routers.assessment import router as assessment_router
from compliance_engine.routers.framework import router as framework_router
from compliance_engine.services.framework_registry import get_registry

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(framework_router)
app.include_router(assessment_router)


@app.get("/health")
async def health():
    """Health check: verifies API is running and framework definitions loaded."""
    try:
        frameworks = len(get_registry())
        registry_status = "loaded"
    except Exception as exc:
        frameworks = 0
        registry_status = f"error: {exc}"

    return {
        "status": "ok" if registry_status == "loaded" and frameworks else "degraded",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "frameworks": frameworks,
        "registry": registry_status,
    }
