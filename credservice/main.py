from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
from contextlib import asynccontextmanager

from credservice.base_microservice import BaseMicroservice, SERVICE_NAME, SERVICE_VERSION
from credservice.auth.router import router as auth_router, start_auth_service

# Create shared base microservice instance
base_service = BaseMicroservice("main")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    base_service.log_event("service.startup", {"service": "main"})
    try:
        await start_auth_service()
    except Exception as e:
        base_service.log_error(e, context="Service startup")
        raise
    yield
    base_service.log_event("service.shutdown", {"service": "main"})

# Create main FastAPI app with lifespan
app = FastAPI(
    title=SERVICE_NAME,
    description="In-memory credential authority: account registration and login",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with prefixes
app.include_router(auth_router, prefix="/auth", tags=["auth"])

@app.get("/", tags=["root"])
async def root():
    """Root endpoint returning API information."""
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "services": ["auth"]
    }

@app.get("/health", tags=["health"])
async def health_check():
    """Overall system health check."""
    return base_service.mcp_response(
        message="System health",
        data={
            "status": "ok",
            "services": {
                "auth": "online"
            }
        }
    )

# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("credservice.main:app", host="0.0.0.0", port=8000, reload=True)
