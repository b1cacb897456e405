"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All server configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: portfolio/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# Load .env into environment BEFORE pydantic reads. override=True ensures .env
# values override any shell env.
# When .env doesn't exist (prod), this is a no-op; platform env vars are used.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "Portfolio"
    app_version: str = "1.0.0"
    port: int = 8001
    cors_origins: str = "*"

    # Database
    database_url: str = "sqlite:///./portfolio.db"

    # Admin auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Redis
    redis_url: str = ""

    # Cache TTLs (seconds)
    public_data_cache_ttl: int = 120

    # Resume profile sync (milliseconds)
    resume_rate_limit_ms: int = 5000
    resume_conflict_tolerance_ms: int = 2000

    # Cloudflare R2 (S3-compatible) media storage
    r2_account_id: str = ""
    r2_access_key_id: str = ""
    r2_secret_access_key: str = ""
    r2_bucket_name: str = ""
    r2_public_url: str = ""
    r2_region: str = "auto"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# Resume builder
RESUME_LAYOUTS: tuple[str, ...] = ("classic", "modern", "sidebar", "compact", "timeline")
RESUME_PALETTES: tuple[str, ...] = ("dark-gold", "clean-blue", "rose", "emerald", "mono", "navy")
RESUME_LOCALES: tuple[str, ...] = ("zh", "en")
DEFAULT_LAYOUT: str = "classic"
DEFAULT_PALETTE: str = "clean-blue"
DEFAULT_LOCALE: str = "en"
DEFAULT_FONT_SCALE: int = 100
PROFILE_NAME_MIN_LENGTH: int = 2
PROFILE_NAME_MAX_LENGTH: int = 100
DEVICE_TOKEN_MAX_LENGTH: int = 200

# Media uploads
MEDIA_DEFAULT_FOLDER: str = "uploads"
MEDIA_LIST_MAX_KEYS: int = 200
MEDIA_FOLDER_MAX_KEYS: int = 500

# Cache keys
PUBLIC_DATA_CACHE_KEY: str = "public_data"
PUBLIC_CONFIG_CACHE_KEY: str = "public_config"
