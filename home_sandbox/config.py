import os
from dotenv import load_dotenv
from loguru import logger

load_dotenv()  # Load environment variables from .env file

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/sandbox.db")

# Port the NiceGUI server listens on
PORT = int(os.getenv("PORT", "8080"))

# UI side HTTP client
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")

# Token for the stub /api/user route; empty disables it
API_TOKEN = os.getenv("API_TOKEN", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/app.log")

# Canvas variant: 'single' keeps one device on the canvas, 'multi' allows many
CANVAS_MODES = ('single', 'multi')
CANVAS_MODE = os.getenv("CANVAS_MODE", "single").lower()
if CANVAS_MODE not in CANVAS_MODES:
    logger.warning(f"Unknown CANVAS_MODE '{CANVAS_MODE}', falling back to 'single'")
    CANVAS_MODE = 'single'

# Fallback canvas coordinates for devices without a position
DEFAULT_POSITION = (100, 100)
