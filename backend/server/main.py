import logging

import uvicorn
from fastapi import FastAPI

from config.settings import SERVER_LOG_LEVEL, UVICORN_CONFIG
from server.api.rest.dependencies import shutdown_dependencies
from server.api_router import api_router

logger = logging.getLogger(__name__)

# Local command surface for the desktop watch list client.
app = FastAPI(title="Watch List Gateway", description="Authenticated access to a personal movie/TV watch list")

app.include_router(api_router)


@app.on_event("shutdown")
async def shutdown_event():
    """Close the live connection pool, if any, when the app stops."""
    await shutdown_dependencies()


# Start the server
if __name__ == "__main__":
    logging.basicConfig(
        level=SERVER_LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting watch list gateway; waiting for user authentication")
    uvicorn.run("server.main:app", **UVICORN_CONFIG)
