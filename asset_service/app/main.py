from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.core.exception_handler import setup_exception_handlers
from shared.core.logging_config import setup_logging
from shared.wrappers.response_wrapper import JsonResponseMiddleware, RequestLoggingMiddleware
from . import models  # noqa: F401  registers every table on Base
from .router import assets_router, audit_router, maintenance_router, reports_router, requests_router

setup_logging()

# Create all tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Asset Service API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(JsonResponseMiddleware)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(assets_router.router)
app.include_router(requests_router.router)
app.include_router(maintenance_router.router)
app.include_router(audit_router.router)
app.include_router(reports_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
