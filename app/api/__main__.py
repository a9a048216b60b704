"""
Process entry point.

Usage:
    python -m app.api
"""

import uvicorn

from app.api.config import get_settings
from app.api.main import configure_logging


def main() -> None:
    # Missing DB_URI / SECRET_KEY fail here, before the server binds
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "app.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
