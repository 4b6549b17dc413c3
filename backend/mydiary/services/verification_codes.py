"""Six-digit verification code generation.

Codes are drawn from the ``secrets`` module (OS CSPRNG). It keeps no
shared mutable generator state, so concurrent requests can call it freely.
"""

import secrets

CODE_LOWER_BOUND = 100000
CODE_UPPER_BOUND = 999999


def generate_code() -> int:
    """Return a uniformly random code in [100000, 999999]."""
    return CODE_LOWER_BOUND + secrets.randbelow(CODE_UPPER_BOUND - CODE_LOWER_BOUND + 1)
