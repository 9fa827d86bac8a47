# sipcalc/config.py

import logging
import os

# --- General Configuration ---
SERVICE_NAME = "sipcalc"
LOG_LEVEL = os.getenv("SIPCALC_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# --- HTTP Server Configuration ---
PORT = int(os.getenv("SIPCALC_PORT", "5000"))

# Front-end dev servers (Vite on 5173, CRA on 3000)
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SIPCALC_CORS_ORIGINS", ",".join(DEFAULT_CORS_ORIGINS)).split(",")
    if origin.strip()
]


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.hasHandlers():
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    else:
        root.setLevel(level.upper())
