"""Generate stable, content-based block IDs.

Block IDs combine the block's position with a short hash of its text.
Same text at the same position always produces the same ID across runs.
"""

import hashlib

# Base-36 alphabet for the hash part
HASH_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"

HASH_LENGTH = 6

# Only the start of the text feeds the hash
HASHED_PREFIX = 100


def text_hash(text: str, length: int = HASH_LENGTH) -> str:
    """Hash text into a short base-36 string.

    Args:
        text: Block text; only the first 100 characters are used
        length: Number of characters in the result

    Returns:
        Lowercase alphanumeric string, e.g. "k9x0md"
    """
    # MD5 hash (not for crypto, just for distribution)
    h = hashlib.md5(text[:HASHED_PREFIX].encode("utf-8")).digest()
    num = int.from_bytes(h, "big")

    chars = []
    for _ in range(length):
        chars.append(HASH_CHARS[num % len(HASH_CHARS)])
        num //= len(HASH_CHARS)

    return "".join(chars)


def block_id(text: str, index: int) -> str:
    """Generate a block ID from its text and position.

    Args:
        text: Normalized block text
        index: Position of the block in its document

    Returns:
        ID of the form "block-<index>-<hash>", e.g. "block-3-k9x0md"
    """
    return f"block-{index}-{text_hash(text)}"
