"""
Utility functions for generating and validating order IDs.
"""

import random
import re
import string

ORDER_ID_LENGTH = 13
_ORDER_ID_PATTERN = re.compile(r"^[a-z0-9]{13}$")


def generate_order_id(rng: random.Random | None = None) -> str:
    """
    Generate a 13-character lowercase base-36 order ID.

    Examples: "k3j9x0a1b2c4d", "0z8y7x6w5v4u3"
    """
    characters = string.ascii_lowercase + string.digits
    source = rng or random
    return "".join(source.choices(characters, k=ORDER_ID_LENGTH))


def is_valid_order_id(order_id: object) -> bool:
    """Check that an order ID has the generated format."""
    if not isinstance(order_id, str):
        return False
    return bool(_ORDER_ID_PATTERN.match(order_id))
