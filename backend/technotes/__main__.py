"""Run the API with uvicorn: ``python -m technotes``."""
from __future__ import annotations

from uvicorn import run

from technotes.core.config import get_settings


def main() -> None:
    settings = get_settings()
    run("technotes.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
