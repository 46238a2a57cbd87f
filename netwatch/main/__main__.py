"""
Main module entry point.

Runs the HTTP API with uvicorn: python -m netwatch.main
"""

import uvicorn

from netwatch.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "netwatch.main.app:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
