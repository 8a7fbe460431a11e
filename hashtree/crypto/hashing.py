"""
Crypto - Hashing Utilities
Hash function and hex helpers shared by tree construction, proof
generation and verification.

This module provides:
- BLAKE2b-512 hashing for raw bytes
- Leaf hashing for caller-supplied items (bytes or text)
- Hashing of two concatenated digests (parent nodes)
- Hex encoding/decoding with 0x prefix

Determinism Notes:
- Digests are always 64 bytes
- Text items are always encoded as UTF-8
- Parent digests hash the raw binary concatenation of the two children
"""
from __future__ import annotations

import hashlib
from typing import Union

from hashtree.schemas.errors import DigestFormatException


HASH_ALGORITHM = "blake2b-512"

# Digest size in bytes (512 bits)
DIGEST_SIZE = 64

# Encoding applied to text leaf items before hashing
TEXT_ENCODING = "utf-8"

LeafItem = Union[bytes, bytearray, memoryview, str]


def blake2b_512(data: bytes) -> bytes:
    """
    Compute the BLAKE2b-512 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        64-byte digest
    """
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


def leaf_bytes(item: LeafItem) -> bytes:
    """
    Return the exact bytes hashed for a leaf item.

    Text is encoded as UTF-8; bytes-like values are copied as-is.

    Raises:
        TypeError: If the item is neither text nor bytes-like
    """
    if isinstance(item, str):
        return item.encode(TEXT_ENCODING)
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(
        f"Leaf items must be bytes or str, got {type(item).__name__}"
    )


def hash_leaf(item: LeafItem) -> bytes:
    """
    Hash one leaf item into its level-0 digest.

    Any byte sequence is valid input, including the empty one.

    Example:
        >>> len(hash_leaf(b""))
        64
        >>> hash_leaf("abc") == hash_leaf(b"abc")
        True
    """
    return blake2b_512(leaf_bytes(item))


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two digests: H(left || right).

    Order is significant; the operands are never swapped.
    """
    return blake2b_512(left + right)


def is_digest(value: object) -> bool:
    """Check whether a value has the shape of a digest (64 raw bytes)."""
    return isinstance(value, bytes) and len(value) == DIGEST_SIZE


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string with 0x prefix to bytes.

    Raises:
        DigestFormatException: If the string doesn't start with 0x, has odd
            length, or contains invalid hex characters
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise DigestFormatException(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}...",
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise DigestFormatException(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}",
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise DigestFormatException(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed hex digest and check its size.

    Raises:
        DigestFormatException: If the text is not valid hex or the decoded
            value is not DIGEST_SIZE bytes long
    """
    digest = from_hex(hex_string)
    if len(digest) != DIGEST_SIZE:
        raise DigestFormatException(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}",
            details={"expected_size": DIGEST_SIZE, "actual_size": len(digest)},
        )
    return digest
