"""
Restaurant Table Plan - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from tableplan.core.config import settings
from tableplan.core.db import engine, Base
from tableplan.core.errors import TablePlanError
from tableplan.api import routes_sections, routes_tables
from tableplan.services.repositories import use_firestore
from tableplan.utils.responses import domain_error_response

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if use_firestore():
        logger.info("Using Firestore document store")
    else:
        # Create database tables
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Restaurant Table Plan",
    description="Sections, tables and table subdivision for restaurant seating",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(TablePlanError)
async def table_plan_error_handler(request: Request, exc: TablePlanError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return domain_error_response(exc)

# Include routers
app.include_router(routes_sections.router, tags=["sections"])
app.include_router(routes_tables.router, tags=["tables"])

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
