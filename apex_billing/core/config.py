import os
from typing import Optional

from dotenv import load_dotenv

# Subscription period fields are read from the top-level object, which is the
# layout of this API version.
DEFAULT_STRIPE_API_VERSION = "2024-11-20.acacia"


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.stripe_secret_key = self._get("STRIPE_SECRET_KEY")
        self.stripe_webhook_secret = self._get("STRIPE_WEBHOOK_SECRET")
        self.stripe_api_version = os.getenv("STRIPE_API_VERSION", DEFAULT_STRIPE_API_VERSION)
        self.supabase_url = self._get("SUPABASE_URL")
        self.supabase_service_role_key = self._get("SUPABASE_SERVICE_ROLE_KEY")
        self.supabase_jwt_secret = self._get("SUPABASE_JWT_SECRET")
        self.supabase_timeout_seconds = self._get_float("SUPABASE_TIMEOUT_SECONDS", default=10.0)
        self.frontend_base_url = self._get("FRONTEND_URL").rstrip("/")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get(key: str) -> str:
        value = os.getenv(key)
        if not value:
            raise RuntimeError(f"Missing required environment variable: {key}")
        return value

    @staticmethod
    def _get_float(key: str, default: Optional[float] = None) -> float:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return float(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be a number") from exc
