"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing an inclusion proof
- merkle_root: Compute the root of an ordered leaf sequence
- merkle_proof: Generate a proof for a specific leaf
- verify_proof / check_proof: Verify a proof against a trusted root
- MerkleTree: Static facade, including JSON-object leaves

Commitment Rules:
1. Leaf hashing: blake2b_512(item bytes)
2. Parent hashing: blake2b_512(left || right)
3. Self-pairing: a trailing node at any level is paired with itself
4. Empty input: EmptyInputError
5. Single leaf: root = hash_leaf(item)

Usage:
    from hashtree.merkle import merkle_root, merkle_proof, verify_proof

    root = merkle_root([b"a", b"b", b"c"])
    proof = merkle_proof([b"a", b"b", b"c"], 2)
    assert verify_proof(root, proof)
"""
from .merkle_tree import (
    MerkleProof,
    check_proof,
    compute_proof_length,
    compute_tree_depth,
    hash_leaves,
    merkle_parent,
    merkle_proof,
    merkle_root,
    next_level,
    verify_proof,
)

from .merkle_proofs import (
    MerkleTree,
    object_leaves,
)


__all__ = [
    # Core types
    "MerkleProof",
    # Core functions
    "merkle_parent",
    "hash_leaves",
    "next_level",
    "merkle_root",
    "merkle_proof",
    "verify_proof",
    "check_proof",
    "compute_tree_depth",
    "compute_proof_length",
    # Convenience
    "MerkleTree",
    "object_leaves",
]
