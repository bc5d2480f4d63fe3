"""
RecruitFlow Pipeline API - Entry point for the API application
"""
import uvicorn

from recruitflow.config import settings

if __name__ == "__main__":
    """
    Run the FastAPI application

    Start with:
        python run.py

    Environment variables:
        PORT: Port to run the server on (default: 8000)
        HOST: Host to run the server on (default: 0.0.0.0)
        RELOAD: Whether to reload the server on file changes (default: True)
        LOG_LEVEL: Logging level (default: INFO)
    """
    print("\n" + "=" * 80)
    print("RECRUITFLOW PIPELINE API")
    print("=" * 80)
    print(f"Starting server on {settings.host}:{settings.port}")
    print(f"API documentation: http://localhost:{settings.port}/docs")
    print("=" * 80 + "\n")

    uvicorn.run(
        "recruitflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
