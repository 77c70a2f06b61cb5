"""
Runtime configuration read from environment variables
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db")
ENV = os.getenv("ENV", "production")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

MAPBOX_ACCESS_TOKEN = os.getenv("MAPBOX_ACCESS_TOKEN", "")
MAPBOX_GEOCODING_URL = os.getenv(
    "MAPBOX_GEOCODING_URL",
    "https://api.mapbox.com/geocoding/v5/mapbox.places",
)
GEOCODING_TIMEOUT_SECONDS = float(os.getenv("GEOCODING_TIMEOUT_SECONDS", "10"))

NEARBY_STAND_RADIUS_METERS = float(os.getenv("NEARBY_STAND_RADIUS_METERS", "5000"))

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

_default_origins = [
    "http://localhost:3000",     # Next.js development server
    "http://127.0.0.1:3000",
    "http://localhost",          # nginx proxy
    "http://127.0.0.1",
]

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", ",".join(_default_origins)).split(",")
    if origin.strip()
]
