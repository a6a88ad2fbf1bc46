"""
FastAPI Application Entry Point for PokerArena.

This module creates and configures the FastAPI application with:
- HTTP routes for table management
- A table manager shared by the routes
- CORS middleware for development
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokerarena import __version__
from pokerarena.server.manager import TableManager
from pokerarena.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="PokerArena",
        description="No-Limit Texas Hold'em table simulator with bot seats",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.table_manager = TableManager()
    app.include_router(router)

    logger.info("PokerArena app created")
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "pokerarena.server.app:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
