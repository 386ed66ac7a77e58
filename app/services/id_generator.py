"""
Proxy ID Generator

Proxy IDs are short random tokens over [a-z0-9]. With the default length
of 8 there are 36^8 (about 2.8e12) possible IDs, so a valid ID cannot be
found by guessing in volume.

The generator uses the random module, not secrets: IDs are not meant to
be cryptographic secrets. Two calls may return the same ID; the
registration service decides what to do about collisions.
"""

import random
import string

PROXY_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_proxy_id(length: int = 8) -> str:
    """
    Generate a random proxy ID.

    Args:
        length: Number of characters (default: 8)

    Returns:
        A string of `length` characters, each drawn independently and
        uniformly from PROXY_ID_ALPHABET

    Example:
        generate_proxy_id() -> "k3v9x0qa"
    """
    if length < 1:
        raise ValueError("Proxy ID length must be at least 1")
    return "".join(random.choices(PROXY_ID_ALPHABET, k=length))
