"""
Training & Placement Portal - Main Application

FastAPI backend with:
- MongoDB for student accounts and placement drives
- JWT authentication for students and the admin
- Eligibility-gated drive listing and deadline-gated status tracking

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.db.mongodb import init_mongo_indexes, test_mongo_connection
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Training & Placement Portal",
    description="""
    College placement portal backend.

    ## Features
    - **Students**: Register, see drives they are eligible for, report their stage in each drive
    - **Admin**: Create, edit, deactivate and delete drives; inspect registrations and student stats
    - **Deadlines**: Students cannot change their status once a drive's deadline has passed
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.error("MongoDB index initialization failed: %s", e)


@app.get("/api/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
