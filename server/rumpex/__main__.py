"""`python -m rumpex` 启动入口。"""

from __future__ import annotations

import uvicorn

from rumpex.app import create_app
from rumpex.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
