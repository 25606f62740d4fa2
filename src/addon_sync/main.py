"""Main application entry point."""

import asyncio
import signal
import sys
from typing import Optional

from aiohttp import web

from .config.settings import AppSettings, get_settings
from .utils.logging import setup_logging, get_logger
from .web.app import create_app


class AddonSyncApp:
    """Runs the addon sync web server until asked to stop."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger("AddonSync")
        self.running = False
        self.web_app: Optional[web.Application] = None
        self.web_runner: Optional[web.AppRunner] = None

    async def startup(self):
        """Application startup."""
        self.logger.info(
            "Starting addon sync",
            version=self.settings.version,
            environment=self.settings.environment,
            stremio_api=self.settings.stremio.api_base
        )

        self.web_app = create_app(self.settings)
        self.web_runner = web.AppRunner(self.web_app)
        await self.web_runner.setup()

        host = self.settings.web.host
        port = self.settings.web.port
        site = web.TCPSite(self.web_runner, host, port)
        await site.start()

        self.running = True
        self.logger.info(f"Addon sync page available at http://{host}:{port}/")

    async def shutdown(self):
        """Application shutdown."""
        self.logger.info("Shutting down addon sync")
        self.running = False

        if self.web_runner:
            await self.web_runner.cleanup()
            self.web_runner = None

        self.logger.info("Addon sync stopped")

    async def run(self):
        """Run until a shutdown signal arrives."""
        await self.startup()

        try:
            while self.running:
                await asyncio.sleep(1)
        except asyncio.CancelledError:
            self.logger.info("Received shutdown signal")
        finally:
            await self.shutdown()


def setup_signal_handlers(app: AddonSyncApp):
    """Set up signal handlers for graceful shutdown."""
    def signal_handler(signum, frame):
        app.logger.info(f"Received signal {signum}")
        app.running = False

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


async def main():
    """Main entry point."""
    setup_logging()

    logger = get_logger("main")
    logger.info("Initializing addon sync application")

    app = AddonSyncApp()
    setup_signal_handlers(app)

    await app.run()


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(0)
    except Exception as e:
        print(f"Application failed with error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
