from __future__ import annotations

import argparse

import uvicorn

from caffeine_tracker.config import get_settings
from caffeine_tracker.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Caffeine intake tracker HTTP service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", default=settings.log_level, help="Root log level (e.g. INFO, DEBUG)")
    args = parser.parse_args()

    configure_logging(args.log_level)
    uvicorn.run(
        "caffeine_tracker.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
