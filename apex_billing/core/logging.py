import logging
import os


def configure_logging() -> None:
    """Configure logging defaults for the billing service."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Request lines from the Supabase client would repeat every store call.
    logging.getLogger("httpx").setLevel(logging.WARNING)
