"""
Action dispatcher for Section 2

Turns a validated StructuredResponse into a coffee order. Each step is a
separate blocking call to the shop and must succeed before the next one
starts. Nothing is rolled back: if the order fails, the address and card
created before it stay registered with the shop.
"""

import random
from typing import Optional

from pydantic import BaseModel

from .commerce import Product, TerminalClient
from .config import OutreachConfig
from .errors import NoEligibleProduct
from .responses import StructuredResponse


class OrderConfirmation(BaseModel):
    """Identifiers produced by a successful dispatch."""

    order_id: str
    address_id: str
    card_id: str
    product_name: str
    variant_id: Optional[str] = None


def is_eligible(product: Product) -> bool:
    """One-time purchasable and not a placeholder."""
    return (
        product.name not in OutreachConfig.EXCLUDED_PRODUCT_NAMES
        and product.subscription != OutreachConfig.SUBSCRIPTION_REQUIRED
    )


class ActionDispatcher:
    """Pick a product and ship it to the company named in a StructuredResponse."""

    def __init__(
        self,
        client: TerminalClient,
        rng: Optional[random.Random] = None,
        payment_token: Optional[str] = None,
    ):
        self.client = client
        self.rng = rng or random.Random()
        self.payment_token = payment_token or OutreachConfig.PAYMENT_TOKEN

    def choose_product(self) -> Product:
        """
        List products and choose one eligible product uniformly at random.

        Raises:
            NoEligibleProduct: If nothing on the menu qualifies.
        """
        products = self.client.list_products()
        eligible = [product for product in products if is_eligible(product)]
        if not eligible:
            raise NoEligibleProduct(f"none of {len(products)} listed products can be ordered once")
        return self.rng.choice(eligible)

    def dispatch(self, response: StructuredResponse) -> OrderConfirmation:
        """
        Order a random eligible product to the company's address.

        Raises:
            NoEligibleProduct: Before any address/card/order call is made.
            CommerceError: From whichever shop call fails first.
        """
        product = self.choose_product()
        print(f"Chose randomly: {product.name}")

        company = response.company
        address_id = self.client.create_address(
            name=company.name,
            street1=company.address,
            street2=company.address_line_two,
            city=company.city,
            province=company.state,
            country=company.country,
            zip=company.zip,
        )

        card_id = self.client.create_card(self.payment_token)

        variant_id = product.variants[0].id if product.variants else None
        variants = {variant_id: OutreachConfig.ORDER_QUANTITY} if variant_id else {}
        order_id = self.client.create_order(address_id=address_id, card_id=card_id, variants=variants)

        return OrderConfirmation(
            order_id=order_id,
            address_id=address_id,
            card_id=card_id,
            product_name=product.name,
            variant_id=variant_id,
        )
