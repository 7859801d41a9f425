"""
storehub.api.__main__

Entrypoint for running the service via `python -m storehub.api`.

Responsibilities:
- Load settings and refuse to serve prod traffic with the dev signing secret.
- Create the app and start uvicorn (logging handled by structlog).
"""

from __future__ import annotations

import sys

import uvicorn

from storehub.api.app import create_app
from storehub.settings import Settings, get_settings

_DEV_SECRET = Settings.model_fields["jwt_secret"].default


def main() -> None:
    settings = get_settings()
    if settings.env == "prod" and settings.jwt_secret == _DEV_SECRET:
        sys.exit("STOREHUB_JWT_SECRET must be set in prod")

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
