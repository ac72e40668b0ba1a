"""Configuration module for the WRENCH training platform.

This module provides centralized configuration management, including the
store location, seeded defaults, credential settings, API server settings and
logging. All configuration values can be overridden via environment variables.
"""

import os
from typing import Dict, List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Platform ---

PLATFORM_NAME: str = os.getenv("PLATFORM_NAME", "WRENCH")

# --- Store Configuration ---

# The default URL is an in-memory SQLite database; state lives only as long
# as the process does.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")

# --- Seeded Defaults ---

DEFAULT_COMMUNITY_SLUG: str = os.getenv("DEFAULT_COMMUNITY_SLUG", "automotive")
DEFAULT_COMMUNITY_NAME: str = os.getenv("DEFAULT_COMMUNITY_NAME", "Automotive")
DEFAULT_COMMUNITY_DESCRIPTION: str = os.getenv(
    "DEFAULT_COMMUNITY_DESCRIPTION",
    "Automotive diagnostics and technician training campus.",
)
DEFAULT_COMMUNITY_BRANDING: Dict[str, str] = {
    "primaryColor": os.getenv("DEFAULT_COMMUNITY_COLOR", "#2563eb"),
    "logo": os.getenv("DEFAULT_COMMUNITY_LOGO", "wrench"),
}

DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "wrenchadmin")
DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "owner@wrench-platform.local")
DEFAULT_ADMIN_NAME: str = os.getenv("DEFAULT_ADMIN_NAME", "WRENCH Owner")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "ChangeMeNow!123")

# --- Credentials ---

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

INVITE_CODE_PREFIX: str = os.getenv("INVITE_CODE_PREFIX", "WRENCH")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
