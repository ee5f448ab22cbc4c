"""
Short Code Encoder

Derives a short code from the raw bytes of a URL.

Design Decisions:
- Standard base64 alphabet ([A-Za-z0-9+/] with '=' padding)
- The code is the first 10 characters of the encoded URL
- No salt and no counter: the same URL always gets the same code

Collisions:
Two URLs sharing the same first 7 bytes (for example every URL starting
with "https://") encode to the same leading characters, so different URLs
can and do collide. Collisions are accepted; a later create for a
colliding URL replaces the earlier mapping.
"""

import base64

SHORT_CODE_LENGTH = 10


def encode_short_code(raw: bytes, length: int = SHORT_CODE_LENGTH) -> str:
    """
    Encode raw URL bytes into a short code.

    Args:
        raw: The URL as bytes
        length: Number of characters to keep (default: 10)

    Returns:
        The leading characters of the base64 encoding

    Example:
        encode_short_code(b"https://example.com") -> "aHR0cHM6Ly"
    """
    encoded = base64.b64encode(raw).decode("ascii")
    return encoded[:length]
