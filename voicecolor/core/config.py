"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VoiceColor application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        gemini_api_key: Credential for the Gemini API. Only the backend reads it.
        bucket_dir: Directory backing the snapshot image bucket.
        public_base_url: Public prefix under which bucket objects are served.
        backend_url: Base URL of the relay, used by the Streamlit client.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Gemini (upstream generative API) ---
    gemini_api_key: str = ""  # Required for POST /analyze
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.5
    gemini_timeout: float = 60.0  # Seconds per upstream request

    # --- Snapshot bucket ---
    bucket_dir: str = "data/bucket"
    public_base_url: str = "http://localhost:8000/files"
    serve_bucket: bool = True  # Mount bucket_dir at /files on the relay

    # --- Relay ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"  # Python logging level

    # --- Client ---
    backend_url: str = "http://localhost:8000"
    share_base_url: str = "http://localhost:8501"  # Where the Streamlit UI is reachable
    analyze_timeout: float = 120.0
    recording_duration_seconds: int = 15
    strict_contract: bool = False  # Reject results that break the 12-color contract


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
