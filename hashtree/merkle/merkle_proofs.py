"""
Merkle Tree Convenience Facade
Thin class-based wrapper around the functions in merkle_tree.py.

This module provides:
- MerkleTree: static root / proof / verify entry points
- Object leaves: JSON-like objects hashed through canonical JSON
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from hashtree.crypto.hashing import LeafItem
from hashtree.merkle.merkle_tree import (
    MerkleProof,
    check_proof,
    merkle_proof,
    merkle_root,
    verify_proof,
)
from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.verification import VerificationResult


def object_leaves(objects: Iterable[Any]) -> list[str]:
    """Convert JSON-like objects into leaf items (their canonical JSON)."""
    return [dumps_canonical(obj) for obj in objects]


class MerkleTree:
    """
    Stateless entry points for building and checking Merkle commitments.

    There is no tree instance: every call recomputes what it needs from the
    leaves it is given and keeps nothing afterwards.

    Example:
        >>> data = ["abc", "bcd", "cde", "def", "efg"]
        >>> root = MerkleTree.merkle_root(data)
        >>> proof = MerkleTree.merkle_proof(data, 0)
        >>> MerkleTree.verify_proof(root, proof)
        True
    """

    @staticmethod
    def merkle_root(leaves: Iterable[LeafItem]) -> bytes:
        """
        Compute the root of an ordered leaf sequence.

        Raises:
            EmptyInputError: If leaves is empty
        """
        return merkle_root(leaves)

    @staticmethod
    def merkle_proof(leaves: Iterable[LeafItem], leaf_index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at leaf_index.

        Raises:
            EmptyInputError: If leaves is empty
            IndexOutOfRangeError: If leaf_index is out of range
        """
        return merkle_proof(leaves, leaf_index)

    @staticmethod
    def verify_proof(root: bytes, proof: MerkleProof) -> bool:
        """Verify a proof against a trusted root. Never raises."""
        return verify_proof(root, proof)

    @staticmethod
    def check_proof(root: bytes, proof: MerkleProof) -> VerificationResult:
        """Verify a proof and return the individual check results."""
        return check_proof(root, proof)

    @staticmethod
    def root_from_objects(objects: Sequence[Any]) -> bytes:
        """
        Compute the root for a sequence of JSON-like objects.

        Each object becomes a leaf through canonical JSON serialization.

        Raises:
            EmptyInputError: If objects is empty
            CanonicalizationException: If an object has no canonical form
        """
        return merkle_root(object_leaves(objects))

    @staticmethod
    def prove_object(objects: Sequence[Any], index: int) -> MerkleProof:
        """
        Generate a proof for the object at ``index``.

        The proof's leaf_content is the object's canonical JSON string, so
        it verifies with verify_proof() like any other text leaf.
        """
        return merkle_proof(object_leaves(objects), index)

    @staticmethod
    def verify_object(root: bytes, obj: Any, proof: MerkleProof) -> bool:
        """
        Verify that ``obj`` is the leaf a proof commits to.

        Checks both that the object canonicalizes to the proof's
        leaf_content and that the proof verifies against root.
        """
        return (
            isinstance(proof, MerkleProof)
            and dumps_canonical(obj) == proof.leaf_content
            and verify_proof(root, proof)
        )


__all__ = [
    "MerkleTree",
    "object_leaves",
]
