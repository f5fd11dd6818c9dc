#!/usr/bin/env python3
"""
Run the worker with uvicorn
"""

import uvicorn

from cart_uplift.core.config import settings
from cart_uplift.core.logging import LoggingConfig, setup_logging


def run() -> None:
    setup_logging(LoggingConfig.from_settings(settings.logging))
    uvicorn.run(
        "cart_uplift.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        # keep uvicorn from replacing our handlers
        log_config=None,
    )


if __name__ == "__main__":
    run()
