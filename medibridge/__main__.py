# medibridge/__main__.py
"""Run the local backend: ``python -m medibridge``."""

import uvicorn

from medibridge.common.config import settings


def main() -> None:
    uvicorn.run(
        "medibridge.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
