import logging
import os

from dotenv import load_dotenv

# Load .env file
load_dotenv()


def get_env_var(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


# === Database ===
DATABASE_URL = get_env_var("DATABASE_URL", "sqlite:///./flight_booking.db")
SEED_DATABASE = get_env_var("SEED_DATABASE", "false").lower() == "true"

# === Tokens and passwords ===
SECRET_KEY = get_env_var("SECRET_KEY", "simplyfly-development-secret-key-change-me")
ALGORITHM = get_env_var("ALGORITHM", "HS256")
TOKEN_LIFETIME = int(get_env_var("TOKEN_LIFETIME", "120"))
BCRYPT_ROUNDS = int(get_env_var("BCRYPT_ROUNDS", "12"))

# === HTTP ===
CORS_ORIGINS = [
    origin.strip()
    for origin in get_env_var("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
DEBUG_MODE = get_env_var("DEBUG_MODE", "false").lower() == "true"


def setup_logging():
    """Configure logging for the application"""
    log_level = logging.DEBUG if DEBUG_MODE else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )


def get_logger(name):
    """Get a logger instance for a specific module"""
    return logging.getLogger(name)
