import signal
import sys
import os

# Make home_sandbox importable when started as a script
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from nicegui import ui, app
from loguru import logger

from home_sandbox import config
from home_sandbox.api.api import register_api
from home_sandbox.client.api_client import SandboxApiClient
from home_sandbox.database import init_db, shutdown_db
from home_sandbox.pages.sandbox_page import SandboxPage
from home_sandbox.utils.logger import configure_logging

# Configure logging
configure_logging(config.LOG_LEVEL, config.LOG_FILE)

# One HTTP client shared by every browser session
api_client = SandboxApiClient(config.API_BASE_URL)


def init():
    """Initialize the application"""
    logger.info("Initializing application")

    # Database setup
    init_db()

    # REST API lives on the same FastAPI app that serves the UI
    register_api(app)

    @ui.page('/')
    def sandbox():
        """Drag-and-drop sandbox page"""
        try:
            SandboxPage(api_client).build()
        except Exception as e:
            logger.error(f"Error loading sandbox page: {str(e)}")
            with ui.column().classes('w-full p-4'):
                ui.label('Error loading sandbox page:').classes('text-red-500 font-bold')
                ui.label(str(e)).classes('text-red-500')

    app.on_shutdown(api_client.aclose)
    app.on_shutdown(shutdown_db)
    logger.info("Application initialized successfully")


def handle_shutdown(signum, frame):
    logger.warning("Received shutdown signal")
    shutdown_db()
    sys.exit(0)


signal.signal(signal.SIGINT, handle_shutdown)
signal.signal(signal.SIGTERM, handle_shutdown)

if __name__ in {"__main__", "__mp_main__"}:
    try:
        init()
        ui.run(title='Smart Home Sandbox', favicon='🏠', port=config.PORT)
    except Exception as e:
        logger.error(f"Error starting application: {str(e)}")
        raise
    finally:
        shutdown_db()
