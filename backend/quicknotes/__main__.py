"""
QuickNotes Backend — Server Entry Point
=========================================

Usage:
    python -m quicknotes
    quicknotes              (console script)

Runs uvicorn on HOST:PORT. If the readiness gate gives up during startup,
uvicorn aborts the lifespan and this process exits with uvicorn's
STARTUP_FAILURE status (3).
"""

import sys

import uvicorn
from uvicorn.main import STARTUP_FAILURE

from quicknotes.config import settings


def main() -> None:
    config = uvicorn.Config(
        "quicknotes.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except SystemExit:
        if server.started:
            raise
        sys.exit(STARTUP_FAILURE)
    if not server.started:
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    main()
