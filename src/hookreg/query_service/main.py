"""Main entry point for the hookreg query service."""

import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from hookreg.config import get_settings
from hookreg.query_service.router import router

# Load .env before anything else
load_dotenv()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Hook Registry Query Service",
    description="REST API for reading hooks, hook templates and the event catalog",
    version="0.1.0",
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Run the query service."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    logger.info(
        "Starting hook registry query service on %s:%d", settings.query_host, settings.query_port
    )
    uvicorn.run(app, host=settings.query_host, port=settings.query_port)


if __name__ == "__main__":
    main()
