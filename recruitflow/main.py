import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recruitflow.config import settings
from recruitflow.api import assignment_routes, candidate_routes, workflow_routes

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    description="API for candidate pipeline tracking",
    version=settings.api_version,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(workflow_routes.router)
app.include_router(candidate_routes.router)
app.include_router(assignment_routes.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {"message": f"Welcome to the {settings.api_title}"}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "api": settings.api_title, "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    # Run the application
    uvicorn.run(
        "recruitflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
