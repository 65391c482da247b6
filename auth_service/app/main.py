# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.core.exception_handler import setup_exception_handlers
from shared.core.logging_config import setup_logging
from shared.wrappers.response_wrapper import JsonResponseMiddleware, RequestLoggingMiddleware
from shared.models import users  # noqa: F401
from .routers import authrouter, userrouter

setup_logging()

# Create tables
Base.metadata.create_all(bind=engine)

# This MUST exist for uvicorn
app = FastAPI(title="Asset Management Auth")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(authrouter.router)
app.include_router(userrouter.router)


@app.get("/api/auth/health")
def health():
    return {"status": "healthy"}
