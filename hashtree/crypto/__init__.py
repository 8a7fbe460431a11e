"""
Core cryptographic utilities.

All tree digests are BLAKE2b-512 (64 bytes).
"""
from .hashing import (
    DIGEST_SIZE,
    HASH_ALGORITHM,
    LeafItem,
    blake2b_512,
    digest_from_hex,
    from_hex,
    hash_concat,
    hash_leaf,
    is_digest,
    leaf_bytes,
    to_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "HASH_ALGORITHM",
    "LeafItem",
    "blake2b_512",
    "digest_from_hex",
    "from_hex",
    "hash_concat",
    "hash_leaf",
    "is_digest",
    "leaf_bytes",
    "to_hex",
]
