from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from careshift.core.config import settings
from careshift.core.logging_config import setup_logging
from careshift.middleware.logging import LoggingMiddleware
from careshift.api.v1.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.ENVIRONMENT != "test":
        setup_logging()
    yield


# Create FastAPI app
app_config = {
    "title": "Care Shift Scheduling and Payroll",
    "description": "Turns care coverage into shifts, tracks worked time and computes caregiver payroll",
    "version": "1.0.0",
    "debug": settings.DEBUG,
    "lifespan": lifespan,
}

app = FastAPI(**app_config)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)
app.add_middleware(LoggingMiddleware)

# Include routers
app.include_router(api_router, prefix="/api/v1")

@app.get("/")
async def root():
    return {
        "message": "Care shift scheduling and payroll engine",
        "status": "active",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.ENVIRONMENT,
    }


def run_http():
    """Run HTTP server on port 9106"""
    import uvicorn
    print("Starting HTTP server on port 9106...")
    uvicorn.run(
        "careshift.main:app",
        host="0.0.0.0",
        port=9106,
        reload=False
    )


if __name__ == "__main__":
    run_http()
