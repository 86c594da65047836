"""
Terminal shop REST client.

Covers the four calls the dispatcher needs: list products, create an
address, create a card from a token, and create an order. Every call is
blocking; failures surface as CommerceError.
"""

from typing import Any, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from .config import OutreachConfig
from .errors import CommerceError, ConfigurationError


class ProductVariant(BaseModel):
    id: str
    name: str = ""
    price: int = 0


class Product(BaseModel):
    """A product listed by the shop."""

    id: str
    name: str
    description: str = ""
    subscription: Optional[str] = Field(default=None, description="'allowed', 'required' or absent")
    variants: list[ProductVariant] = Field(default_factory=list)


class TerminalClient:
    """Minimal Terminal shop API wrapper backed by requests."""

    def __init__(
        self,
        bearer_token: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        token = bearer_token or OutreachConfig.TERMINAL_BEARER_TOKEN
        if not token:
            raise ConfigurationError("TERMINAL_BEARER_TOKEN is not set")

        self.base_url = (base_url or OutreachConfig.TERMINAL_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> Any:
        """Perform a request and return the ``data`` field of the JSON body."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, json=payload, headers=self.headers)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            error_detail = ""
            if getattr(exc, "response", None) is not None:
                error_detail = f" Response: {exc.response.text[:500]}"
            raise CommerceError(f"{method} {path} failed: {exc}{error_detail}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise CommerceError(f"{method} {path} returned invalid JSON: {response.text[:200]}") from exc

        if not isinstance(body, dict) or "data" not in body:
            raise CommerceError(f"{method} {path} response did not contain data: {body}")
        return body["data"]

    def list_products(self) -> list[Product]:
        data = self._request("GET", "/product")
        try:
            return [Product.model_validate(item) for item in data]
        except (TypeError, ValidationError) as exc:
            raise CommerceError(f"GET /product returned malformed products: {exc}") from exc

    def create_address(
        self,
        name: str,
        street1: str,
        street2: str,
        city: str,
        province: str,
        country: str,
        zip: str,
    ) -> str:
        """Register a shipping address and return its id."""
        return str(
            self._request(
                "POST",
                "/address",
                {
                    "name": name,
                    "street1": street1,
                    "street2": street2,
                    "city": city,
                    "province": province,
                    "country": country,
                    "zip": zip,
                },
            )
        )

    def create_card(self, token: str) -> str:
        """Attach a payment card from a pre-provisioned token and return its id."""
        return str(self._request("POST", "/card", {"token": token}))

    def create_order(self, address_id: str, card_id: str, variants: dict[str, int]) -> str:
        """Place an order and return its id."""
        return str(
            self._request(
                "POST",
                "/order",
                {
                    "addressID": address_id,
                    "cardID": card_id,
                    "variants": variants,
                },
            )
        )
