import random
import string
from typing import Collection


# Lowercase letters and digits only (Base36)
CHARSET = string.ascii_lowercase + string.digits  # a-z0-9


def generate_short_code(length: int = 6, taken: Collection[str] = ()) -> str:
    """
    Generate a short display code not present in `taken`.

    Args:
        length: Length of the code
        taken: Codes already used by links in the collection

    Returns:
        A lowercase short code

    Note:
        - 6 chars: 36^6 = 2,176,782,336 combinations
        - Codes are display tokens only, nothing resolves them
    """
    max_attempts = 100
    attempt = 0

    while attempt < max_attempts:
        code = ''.join(random.choices(CHARSET, k=length))

        if code not in taken:
            return code

        attempt += 1

    # If we couldn't find a free code, increase length by 1
    if length < 10:
        return generate_short_code(length + 1, taken)

    raise ValueError("Unable to generate unique short code")


def build_short_url(domain: str, short_code: str) -> str:
    """Display string for a short code, e.g. 'lp.ai/x3k9qa'"""
    return f"{domain}/{short_code}"
