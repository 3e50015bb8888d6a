import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS - comma separated list, "*" allows any origin
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# API
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")

# Create missing tables at startup instead of relying on Alembic (development only)
DB_CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "false").lower() == "true"

# Database pool defaults
DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_OVERFLOW = 10
DEFAULT_POOL_RECYCLE = 3600  # 1 hour
DEFAULT_POOL_TIMEOUT = 30
DEFAULT_RETRY_ATTEMPTS = 5
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MAX_RETRY_DELAY = 30.0


def get_database_url() -> str:
    """Build the async database URL.

    ``DATABASE_URL`` wins when set; otherwise the URL is assembled from the
    individual ``DATABASE_*`` variables.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    database_config = {
        'dbname': os.getenv("DATABASE_NAME") or "childcare",
        'user': os.getenv("DATABASE_USER") or "postgres",
        'password': os.getenv("DATABASE_PASSWORD", "password"),
        'host': os.getenv("DATABASE_HOST") or "localhost",
        'port': os.getenv("DATABASE_PORT", "5432"),
    }

    # Ensure port is valid
    try:
        port_int = int(database_config['port'])
        if port_int <= 0 or port_int > 65535:
            database_config['port'] = "5432"
    except (ValueError, TypeError):
        database_config['port'] = "5432"

    return (
        f"postgresql+asyncpg://{database_config['user']}:{quote_plus(str(database_config['password'] or ''))}"
        f"@{database_config['host']}:{database_config['port']}/{database_config['dbname']}"
    )


def get_sync_database_url() -> str:
    """Same database, synchronous driver (used by Alembic)."""
    return get_database_url().replace("+asyncpg", "+psycopg2", 1)


def get_engine_options() -> dict:
    """Engine configuration options read from the environment."""
    options = {
        "echo": os.getenv("SQL_ECHO", "false").lower() == "true",
        "pool_pre_ping": os.getenv("DB_POOL_PRE_PING", "true").lower() == "true",
    }
    if get_database_url().startswith("sqlite"):
        # SQLite uses a static pool, sizing options do not apply
        return options

    options.update({
        "pool_size": int(os.getenv("DB_POOL_SIZE", str(DEFAULT_POOL_SIZE))),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", str(DEFAULT_MAX_OVERFLOW))),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", str(DEFAULT_POOL_RECYCLE))),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", str(DEFAULT_POOL_TIMEOUT))),
    })
    return options


def get_retry_settings() -> dict:
    """Retry settings for engine creation."""
    return {
        "attempts": int(os.getenv("DB_CONNECTION_RETRIES", str(DEFAULT_RETRY_ATTEMPTS))),
        "min_delay": float(os.getenv("DB_RETRY_DELAY", str(DEFAULT_RETRY_DELAY))),
        "max_delay": float(os.getenv("DB_MAX_RETRY_DELAY", str(DEFAULT_MAX_RETRY_DELAY))),
    }
