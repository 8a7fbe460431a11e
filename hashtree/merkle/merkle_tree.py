"""
Merkle Tree Implementation
Deterministic root computation, inclusion proof generation, and proof
verification over an ordered sequence of leaf items.

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = blake2b_512(item bytes), text items UTF-8 encoded
2. Parent hashing: parent = blake2b_512(left || right), raw digest bytes
3. Self-pairing: a trailing node with no partner is paired with itself,
   parent = blake2b_512(node || node), at every level where it occurs
4. Empty input: rejected with EmptyInputError (there is no empty root)
5. Single leaf: root = hash_leaf(item), proof carries no siblings

Determinism Notes:
- No randomness or sorting; leaf order is defined by the caller
- Pair order is always (earlier index, later index)
- Verification replays exactly the same pairing, using the parity of the
  tracked index at each level to decide concatenation order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from hashtree.crypto.hashing import (
    DIGEST_SIZE,
    LeafItem,
    blake2b_512,
    hash_concat,
    hash_leaf,
    is_digest,
    leaf_bytes,
)
from hashtree.schemas.errors import (
    EmptyInputError,
    ErrorCodes,
    HashTreeError,
    IndexOutOfRangeError,
)
from hashtree.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf of a Merkle tree.

    The proof owns copies of everything it needs; it holds no reference to
    the tree (or leaf sequence) that produced it.

    Attributes:
        hashes: Sibling digests from bottom to top of the tree
        num_of_leaves: Total number of leaves the tree was built from
        leaf_index: 0-based index of the proven leaf in the original sequence
        leaf_content: The original (unhashed) leaf item
    """
    hashes: tuple[bytes, ...]
    num_of_leaves: int
    leaf_index: int
    leaf_content: Union[bytes, str]

    def __post_init__(self) -> None:
        # Freeze whatever sequence the caller passed in
        object.__setattr__(self, "hashes", tuple(self.hashes))


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent digest of two child digests: H(left || right).

    For a self-paired node call ``merkle_parent(node, node)``.
    """
    return hash_concat(left, right)


def hash_leaves(items: Iterable[LeafItem]) -> list[bytes]:
    """Hash every item into its leaf digest, preserving order (level 0)."""
    return [hash_leaf(item) for item in items]


def next_level(level: Sequence[bytes]) -> list[bytes]:
    """
    Reduce one level of the tree to the level above it.

    The level is processed in consecutive non-overlapping pairs, left to
    right. A trailing singleton (odd-length level) is paired with itself.

    Example: [a, b, c] -> [H(a||b), H(c||c)]
    """
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(left, right))
    return parents


def merkle_root(items: Iterable[LeafItem]) -> bytes:
    """
    Compute the Merkle root of an ordered sequence of leaf items.

    Algorithm:
    1. Hash every item to its leaf digest (level 0)
    2. While the level has more than one digest, reduce it with next_level()
    3. The single remaining digest is the root

    Args:
        items: Ordered leaf items (bytes or str). Order matters.

    Returns:
        64-byte root digest

    Raises:
        EmptyInputError: If there are no items

    Example:
        >>> merkle_root([b"x"]) == hash_leaf(b"x")
        True
    """
    current_level = hash_leaves(items)
    if not current_level:
        raise EmptyInputError()

    logger.debug("Computing Merkle root over %d leaves", len(current_level))

    while len(current_level) > 1:
        current_level = next_level(current_level)

    return current_level[0]


def _sibling_of(level: Sequence[bytes], index: int) -> bytes:
    """
    Return the sibling recorded for the node at ``index`` in ``level``.

    - even index with a partner: the next node
    - odd index: the previous node
    - trailing singleton: the node itself (self-pairing)
    """
    if index % 2 == 1:
        return level[index - 1]
    if index + 1 < len(level):
        return level[index + 1]
    return level[index]


def merkle_proof(items: Iterable[LeafItem], leaf_index: int) -> MerkleProof:
    """
    Generate an inclusion proof for the leaf at ``leaf_index``.

    Runs the same reduction as merkle_root() while tracking the position of
    the proven node; at every level the sibling of that node is recorded,
    bottom to top, and the position is halved.

    Args:
        items: Ordered leaf items (bytes or str)
        leaf_index: 0-based index of the leaf to prove

    Returns:
        MerkleProof carrying the siblings, the leaf count, the index and
        the original leaf item

    Raises:
        EmptyInputError: If there are no items
        IndexOutOfRangeError: If leaf_index is not in range(len(items))
    """
    leaves = list(items)
    if not leaves:
        raise EmptyInputError("Cannot generate a proof for an empty leaf sequence")

    if isinstance(leaf_index, bool) or not isinstance(leaf_index, int):
        raise TypeError(f"leaf_index must be an int, got {type(leaf_index).__name__}")

    if leaf_index < 0 or leaf_index >= len(leaves):
        raise IndexOutOfRangeError(leaf_index, len(leaves))

    leaf_content = leaves[leaf_index]
    if not isinstance(leaf_content, str):
        # Own copy of the content; also rejects non bytes-like items early
        leaf_content = leaf_bytes(leaf_content)

    siblings: list[bytes] = []
    current_level = hash_leaves(leaves)
    current_index = leaf_index

    while len(current_level) > 1:
        siblings.append(_sibling_of(current_level, current_index))
        current_level = next_level(current_level)
        current_index //= 2

    logger.debug(
        "Generated proof for leaf %d of %d (%d siblings)",
        leaf_index, len(leaves), len(siblings),
    )

    return MerkleProof(
        hashes=tuple(siblings),
        num_of_leaves=len(leaves),
        leaf_index=leaf_index,
        leaf_content=leaf_content,
    )


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with ``num_leaves`` leaves.

    Depth counts levels from leaves to root inclusive: a single leaf has
    depth 1, two leaves have depth 2, and an empty tree has depth 0.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        # Self-pairing rounds odd levels up
        n = (n + 1) // 2
        depth += 1

    return depth


def compute_proof_length(num_leaves: int) -> int:
    """
    Number of sibling digests a valid proof carries: ceil(log2(n)).

    0 for a single leaf (and for an empty tree, which has no proofs).
    """
    return max(compute_tree_depth(num_leaves) - 1, 0)


def _replay(proof: MerkleProof) -> tuple[bytes | None, str | None]:
    """
    Recompute the root claimed by a proof.

    Returns:
        (computed_root, None) when the proof is well formed, or
        (None, reason) when its shape is inconsistent with its own
        leaf count and index.
    """
    if not isinstance(proof, MerkleProof):
        return None, f"expected a MerkleProof, got {type(proof).__name__}"

    num_of_leaves = proof.num_of_leaves
    index = proof.leaf_index

    for name, value in (("num_of_leaves", num_of_leaves), ("leaf_index", index)):
        if isinstance(value, bool) or not isinstance(value, int):
            return None, f"{name} must be an int, got {type(value).__name__}"

    if num_of_leaves < 1:
        return None, f"num_of_leaves must be at least 1, got {num_of_leaves}"

    if index < 0 or index >= num_of_leaves:
        return None, f"leaf_index {index} out of range for {num_of_leaves} leaves"

    expected_length = compute_proof_length(num_of_leaves)
    if len(proof.hashes) != expected_length:
        return None, (
            f"proof carries {len(proof.hashes)} siblings, "
            f"a tree of {num_of_leaves} leaves needs {expected_length}"
        )

    for level, sibling in enumerate(proof.hashes):
        if not is_digest(sibling):
            return None, f"sibling at level {level} is not a {DIGEST_SIZE}-byte digest"

    if not isinstance(proof.leaf_content, (bytes, str)):
        return None, (
            f"leaf_content must be bytes or str, got {type(proof.leaf_content).__name__}"
        )

    try:
        current_hash = blake2b_512(leaf_bytes(proof.leaf_content))
    except UnicodeEncodeError:
        # e.g. lone surrogates decoded from a JSON proof document
        return None, "leaf_content is not encodable as UTF-8"

    level_size = num_of_leaves

    for level, sibling in enumerate(proof.hashes):
        if index % 2 == 0:
            if index == level_size - 1 and sibling != current_hash:
                # Trailing singleton: the only valid sibling is the node itself
                return None, f"self-paired node at level {level} carries a foreign sibling"
            current_hash = merkle_parent(current_hash, sibling)
        else:
            current_hash = merkle_parent(sibling, current_hash)

        index //= 2
        level_size = (level_size + 1) // 2

    return current_hash, None


def verify_proof(root: bytes, proof: MerkleProof) -> bool:
    """
    Verify an inclusion proof against a trusted root.

    Algorithm:
    1. Start with hash_leaf(proof.leaf_content) at proof.leaf_index
    2. For each sibling (bottom-up):
       - even index: hash = parent(hash, sibling)
       - odd index:  hash = parent(sibling, hash)
       - index = index // 2
    3. Compare the result with ``root``

    Never raises: a malformed, truncated, extended or tampered proof, or a
    root that is not a digest, simply yields False.

    Args:
        root: Trusted 64-byte root digest
        proof: MerkleProof to verify

    Returns:
        True if the proof recomputes ``root``, False otherwise
    """
    computed, reason = _replay(proof)
    if reason is not None:
        logger.debug("Rejecting malformed proof: %s", reason)
        return False

    if not is_digest(root):
        logger.debug("Rejecting proof: trusted root is not a %d-byte digest", DIGEST_SIZE)
        return False

    return computed == root


def check_proof(root: bytes, proof: MerkleProof) -> VerificationResult:
    """
    Verify a proof and report each check that was applied.

    Same decision as verify_proof(); the result's ``ok`` equals
    ``verify_proof(root, proof)``.

    Checks:
    - proof_structure: leaf count, index, sibling count and self-pairing
      are mutually consistent
    - root_match: the replayed root equals the trusted root
    """
    computed, reason = _replay(proof)

    if reason is not None:
        structure = CheckResult.failed(
            "proof_structure",
            f"Malformed proof: {reason}",
        )
        return VerificationResult.failure(
            checks=[structure],
            error=HashTreeError(
                code=ErrorCodes.MERKLE_PROOF_INVALID,
                message=structure.message,
            ),
        )

    checks = [
        CheckResult.passed(
            "proof_structure",
            "Proof shape is consistent with its leaf count and index",
            details={
                "num_of_leaves": proof.num_of_leaves,
                "leaf_index": proof.leaf_index,
                "siblings": len(proof.hashes),
            },
        )
    ]

    if not is_digest(root):
        checks.append(CheckResult.failed(
            "root_match",
            f"Trusted root is not a {DIGEST_SIZE}-byte digest",
        ))
        error_code = ErrorCodes.DIGEST_FORMAT_ERROR
    elif computed != root:
        checks.append(CheckResult.failed(
            "root_match",
            "Recomputed root does not match the trusted root",
            details={"computed_root": computed.hex(), "trusted_root": root.hex()},
        ))
        error_code = ErrorCodes.ROOT_MISMATCH
    else:
        return VerificationResult.success(
            checks + [CheckResult.passed("root_match", "Recomputed root matches")]
        )

    return VerificationResult.failure(
        checks=checks,
        error=HashTreeError(
            code=error_code,
            message=checks[-1].message,
        ),
    )


__all__ = [
    "MerkleProof",
    "merkle_parent",
    "hash_leaves",
    "next_level",
    "merkle_root",
    "merkle_proof",
    "verify_proof",
    "check_proof",
    "compute_tree_depth",
    "compute_proof_length",
]
