"""Application entry point."""

import logging
import uvicorn

from leaderboard.config import Config
from leaderboard.app import create_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main():
    """Run the application."""
    config = Config.from_env()

    # Configure logging
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
