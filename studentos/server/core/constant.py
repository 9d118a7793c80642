"""Constants shared by the API layer."""

PROJECT_NAME = "StudentOS API"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "2025.1"
API_PREFIX = "/api"

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

SLOW_REQUEST_THRESHOLD_MS = 1000

LOGIN_PATH = f"{API_PREFIX}/auth/login"
