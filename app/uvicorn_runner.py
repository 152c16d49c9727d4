from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn


def main():
    root = Path(__file__).resolve().parent.parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    log_level = os.getenv("FLIGHTQUERY_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "app.main:app",
        host=os.getenv("FLIGHTQUERY_HOST", "127.0.0.1"),
        port=int(os.getenv("FLIGHTQUERY_PORT", "8000")),
        log_level=log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()
