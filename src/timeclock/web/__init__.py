"""Timeclock Web API - FastAPI served by uvicorn."""

import os
import uvicorn

from ..logging_setup import configure_logging


def main():
    """Entry point for timeclock-web command."""
    configure_logging()
    port = int(os.environ.get("TIMECLOCK_WEB_PORT", "8000"))
    host = os.environ.get("TIMECLOCK_WEB_HOST", "127.0.0.1")

    uvicorn.run(
        "timeclock.web.app:app",
        host=host,
        port=port,
        reload=os.environ.get("TIMECLOCK_WEB_RELOAD", "").lower() == "true",
    )


if __name__ == "__main__":
    main()
