"""
Configuration for Section 2: Outreach

Handles API credentials, model settings, prompt versioning,
and commerce parameters.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class OutreachConfig:
    """Configuration for the company advisor and the coffee order."""

    # Gemini/Google AI settings
    GEMINI_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("OUTREACH_MODEL", "gemini-2.5-flash")

    # Bump this whenever you materially change:
    # - the instruction text in CompanyPrompts
    # - the one-shot example response
    # - the response parser's required attributes
    PROMPT_VERSION: str = "company_v2"

    # Terminal shop
    TERMINAL_BEARER_TOKEN: Optional[str] = os.getenv("TERMINAL_BEARER_TOKEN")
    TERMINAL_BASE_URL: str = os.getenv("TERMINAL_BASE_URL", "https://api.dev.terminal.shop/")
    # Pre-provisioned test card token; never derived from a CVE.
    PAYMENT_TOKEN: str = os.getenv("TERMINAL_PAYMENT_TOKEN", "tok_1N3T00LkdIwHu7ixt44h1F8k")

    # Decaf is listed as "404". They need caffeine.
    EXCLUDED_PRODUCT_NAMES = frozenset({"404"})
    SUBSCRIPTION_REQUIRED: str = "required"
    ORDER_QUANTITY: int = 1

    @classmethod
    def missing_credentials(cls, require_commerce: bool = True) -> list[str]:
        """Return the names of required credentials that are not set."""
        missing = []
        if not cls.GEMINI_API_KEY:
            missing.append("GOOGLE_API_KEY")
        if require_commerce and not cls.TERMINAL_BEARER_TOKEN:
            missing.append("TERMINAL_BEARER_TOKEN")
        return missing

    @classmethod
    def validate(cls, require_commerce: bool = True) -> None:
        """
        Raise ConfigurationError if a required credential is missing.

        Set via: export GOOGLE_API_KEY='...' TERMINAL_BEARER_TOKEN='...'
        or put them in a .env file.
        """
        missing = cls.missing_credentials(require_commerce=require_commerce)
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
