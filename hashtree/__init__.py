"""
hashtree - Merkle tree commitments over ordered data.

Compute a root digest that commits to an ordered sequence of items,
generate compact inclusion proofs for single items, and verify those
proofs against a trusted root.

Usage:
    from hashtree import merkle_root, merkle_proof, verify_proof

    data = ["abc", "bcd", "cde", "def", "efg"]
    root = merkle_root(data)
    proof = merkle_proof(data, 0)
    assert verify_proof(root, proof)
"""

__version__ = "0.1.0"

from hashtree.crypto import (
    DIGEST_SIZE,
    HASH_ALGORITHM,
    from_hex,
    hash_leaf,
    to_hex,
)
from hashtree.merkle import (
    MerkleProof,
    MerkleTree,
    check_proof,
    compute_proof_length,
    compute_tree_depth,
    merkle_parent,
    merkle_proof,
    merkle_root,
    next_level,
    verify_proof,
)
from hashtree.schemas import (
    EmptyInputError,
    HashTreeException,
    IndexOutOfRangeError,
    ProofFormatException,
    VerificationResult,
)
from hashtree.schemas.proof import ProofDocument

__all__ = [
    "DIGEST_SIZE",
    "HASH_ALGORITHM",
    "from_hex",
    "hash_leaf",
    "to_hex",
    "MerkleProof",
    "MerkleTree",
    "check_proof",
    "compute_proof_length",
    "compute_tree_depth",
    "merkle_parent",
    "merkle_proof",
    "merkle_root",
    "next_level",
    "verify_proof",
    "EmptyInputError",
    "HashTreeException",
    "IndexOutOfRangeError",
    "ProofFormatException",
    "VerificationResult",
    "ProofDocument",
]
