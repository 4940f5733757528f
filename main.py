import os

import uvicorn

from tracker.config_manager import config
from tracker.logger import setup_logging


def main():
    """Main entry point for the Daily Tracker web service."""
    setup_logging()

    reload_enabled = os.getenv("DAILY_TRACKER_RELOAD", "0").lower() in {"1", "true", "yes"}
    host = os.getenv("DAILY_TRACKER_HOST", config.API_HOST)
    port = int(os.getenv("DAILY_TRACKER_PORT", str(config.API_PORT)))

    uvicorn.run(
        "web.backend.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
        reload_dirs=["web", "tracker"] if reload_enabled else None,
    )


if __name__ == "__main__":
    main()
