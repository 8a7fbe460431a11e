"""
Common test fixtures shared by all test modules.

Provides the leaf sets used across the suite plus small helpers for
building tampered proofs.
"""

from dataclasses import replace

from hashtree.crypto.hashing import blake2b_512
from hashtree.merkle.merkle_tree import MerkleProof


FIVE_ITEMS = ("a", "b", "c", "d", "e")
SEVEN_ITEMS = ("a", "b", "c", "d", "e", "f", "g")
DEMO_ITEMS = ("abc", "bcd", "cde", "def", "efg")


def make_items(count: int, prefix: bytes = b"leaf") -> list[bytes]:
    """Create ``count`` distinct byte items."""
    return [prefix + str(i).encode() for i in range(count)]


def flip_first_byte(data: bytes) -> bytes:
    """Return ``data`` with its first byte inverted."""
    return bytes([data[0] ^ 0xFF]) + data[1:]


def with_sibling(proof: MerkleProof, level: int, sibling: bytes) -> MerkleProof:
    """Copy of ``proof`` with the sibling at ``level`` replaced."""
    hashes = list(proof.hashes)
    hashes[level] = sibling
    return replace(proof, hashes=tuple(hashes))


def foreign_digest(label: bytes = b"tampered") -> bytes:
    """A well-formed digest that belongs to no tree in the tests."""
    return blake2b_512(label)
