"""Main entry point for the delivery chatbot."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from delivery_bot.api import create_fastapi_app
from delivery_bot.app import Application
from delivery_bot.config import Settings
from delivery_bot.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)

    app = create_fastapi_app(Application(settings=settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
