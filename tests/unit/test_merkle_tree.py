"""
Merkle Tree Unit Tests
Tests for hashtree/merkle/merkle_tree.py

Covers:
1. Root determinism and order sensitivity
2. Self-pairing of the odd node out at every level
3. Proof generation and verification for every index
4. Proof shape: ceil(log2(n)) siblings
5. Tamper detection: leaf content, siblings, root, index
6. Explicit errors for empty input and out-of-range indices
7. Verification never raises on malformed proofs
"""
import math
from dataclasses import FrozenInstanceError, replace

import pytest

from fixtures.common import flip_first_byte, foreign_digest, make_items, with_sibling
from hashtree.crypto.hashing import blake2b_512, hash_leaf
from hashtree.merkle.merkle_tree import (
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
from hashtree.schemas.errors import EmptyInputError, IndexOutOfRangeError


class TestEmptyInput:
    """Empty leaf sequences are rejected explicitly."""

    def test_root_of_empty_raises(self):
        with pytest.raises(EmptyInputError):
            merkle_root([])

    def test_proof_of_empty_raises(self):
        with pytest.raises(EmptyInputError, match="empty"):
            merkle_proof([], 0)

    def test_empty_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            merkle_root(iter(()))


class TestSingleLeaf:
    """Tests for single-leaf trees."""

    def test_root_equals_leaf_hash(self):
        assert merkle_root([b"x"]) == hash_leaf(b"x")
        assert merkle_root(["x"]) == hash_leaf("x")

    def test_proof_has_no_siblings(self):
        proof = merkle_proof([b"only"], 0)

        assert proof.hashes == ()
        assert proof.num_of_leaves == 1
        assert proof.leaf_index == 0
        assert proof.leaf_content == b"only"

    def test_proof_verifies(self):
        proof = merkle_proof(["single"], 0)
        assert verify_proof(merkle_root(["single"]), proof)


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self, five_items):
        roots = [merkle_root(five_items) for _ in range(10)]
        assert all(r == roots[0] for r in roots)

    def test_root_is_64_bytes(self, five_items):
        assert len(merkle_root(five_items)) == 64

    def test_accepts_any_iterable(self, five_items):
        assert merkle_root(iter(five_items)) == merkle_root(five_items)
        assert merkle_root(tuple(five_items)) == merkle_root(five_items)

    def test_different_leaves_different_roots(self):
        assert merkle_root([b"a", b"b"]) != merkle_root([b"x", b"y"])

    def test_leaf_order_matters(self):
        assert merkle_root([b"a", b"b", b"c"]) != merkle_root([b"c", b"b", b"a"])

    def test_text_and_utf8_bytes_agree(self, five_items):
        encoded = [item.encode("utf-8") for item in five_items]
        assert merkle_root(five_items) == merkle_root(encoded)


class TestSelfPairing:
    """The odd node out is paired with itself, never promoted."""

    def test_next_level_pairs_trailing_node_with_itself(self):
        a, b, c = hash_leaves([b"a", b"b", b"c"])
        assert next_level([a, b, c]) == [merkle_parent(a, b), merkle_parent(c, c)]

    def test_next_level_of_even_level(self):
        a, b, c, d = hash_leaves([b"a", b"b", b"c", b"d"])
        assert next_level([a, b, c, d]) == [merkle_parent(a, b), merkle_parent(c, d)]

    def test_three_leaves(self):
        a, b, c = hash_leaves([b"a", b"b", b"c"])
        expected = merkle_parent(merkle_parent(a, b), merkle_parent(c, c))

        assert merkle_root([b"a", b"b", b"c"]) == expected

    def test_five_leaves(self, five_items):
        a, b, c, d, e = hash_leaves(five_items)

        # Level 1: [ab, cd, ee]  Level 2: [abcd, eeee]
        ab = merkle_parent(a, b)
        cd = merkle_parent(c, d)
        ee = merkle_parent(e, e)
        expected = merkle_parent(merkle_parent(ab, cd), merkle_parent(ee, ee))

        assert merkle_root(five_items) == expected

    def test_seven_leaves(self, seven_items):
        a, b, c, d, e, f, g = hash_leaves(seven_items)

        # Level 1: [ab, cd, ef, gg]  Level 2: [abcd, efgg]
        expected = merkle_parent(
            merkle_parent(merkle_parent(a, b), merkle_parent(c, d)),
            merkle_parent(merkle_parent(e, f), merkle_parent(g, g)),
        )

        assert merkle_root(seven_items) == expected

    def test_self_pairing_is_not_promotion(self):
        a, b, c = hash_leaves([b"a", b"b", b"c"])
        promoted = merkle_parent(merkle_parent(a, b), c)

        assert merkle_root([b"a", b"b", b"c"]) != promoted

    def test_singleton_sibling_is_own_digest(self, five_items):
        proof = merkle_proof(five_items, 4)
        e = hash_leaf("e")
        ee = merkle_parent(e, e)

        assert proof.hashes[0] == e
        assert proof.hashes[1] == ee

    def test_parent_is_binary_concatenation(self):
        left = blake2b_512(b"left")
        right = blake2b_512(b"right")
        assert merkle_parent(left, right) == blake2b_512(left + right)


class TestProofGeneration:
    """Tests for merkle_proof()."""

    def test_example_five_items_index_1(self, five_items):
        proof = merkle_proof(five_items, 1)

        assert proof.leaf_content == "b"
        assert proof.leaf_index == 1
        assert proof.num_of_leaves == 5
        assert verify_proof(merkle_root(five_items), proof)

    def test_example_seven_items_index_4(self, seven_items):
        proof = merkle_proof(seven_items, 4)
        assert verify_proof(merkle_root(seven_items), proof)

    def test_siblings_are_recorded_bottom_to_top(self):
        items = [b"a", b"b", b"c", b"d"]
        a, b, c, d = hash_leaves(items)

        proof = merkle_proof(items, 2)

        assert proof.hashes == (d, merkle_parent(a, b))

    def test_odd_index_records_left_sibling(self):
        items = [b"a", b"b", b"c", b"d"]
        a, b, c, d = hash_leaves(items)

        proof = merkle_proof(items, 1)

        assert proof.hashes == (a, merkle_parent(c, d))

    def test_proof_keeps_original_content(self):
        items = [b"raw-0", bytearray(b"raw-1"), "text-2"]

        assert merkle_proof(items, 0).leaf_content == b"raw-0"
        assert merkle_proof(items, 1).leaf_content == b"raw-1"
        assert isinstance(merkle_proof(items, 1).leaf_content, bytes)
        assert merkle_proof(items, 2).leaf_content == "text-2"

    def test_index_out_of_range_raises(self, five_items):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            merkle_proof(five_items, 5)

        assert exc_info.value.leaf_index == 5
        assert exc_info.value.num_of_leaves == 5

    def test_negative_index_raises(self, five_items):
        with pytest.raises(IndexOutOfRangeError):
            merkle_proof(five_items, -1)

    def test_out_of_range_error_is_index_error(self, five_items):
        with pytest.raises(IndexError):
            merkle_proof(five_items, 100)

    def test_non_int_index_raises_type_error(self, five_items):
        with pytest.raises(TypeError):
            merkle_proof(five_items, "1")

    def test_proof_is_immutable(self, five_items):
        proof = merkle_proof(five_items, 0)
        with pytest.raises(FrozenInstanceError):
            proof.leaf_index = 1

    def test_hashes_list_is_frozen_to_tuple(self):
        proof = MerkleProof(hashes=[foreign_digest()], num_of_leaves=2, leaf_index=0, leaf_content=b"x")
        assert isinstance(proof.hashes, tuple)


class TestProofRoundTrip:
    """Every leaf of every tree size proves and verifies."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 6, 7, 8, 9, 13, 16, 17])
    def test_every_index_verifies(self, count):
        items = make_items(count)
        root = merkle_root(items)

        for i in range(count):
            assert verify_proof(root, merkle_proof(items, i)), f"index {i} of {count}"

    @pytest.mark.slow
    def test_every_index_verifies_up_to_69_leaves(self):
        for count in range(18, 70):
            items = make_items(count)
            root = merkle_root(items)

            for i in range(count):
                assert verify_proof(root, merkle_proof(items, i)), f"index {i} of {count}"

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7, 8, 9, 31, 32, 33])
    def test_proof_length_is_ceil_log2(self, count):
        items = make_items(count)
        expected = 0 if count == 1 else math.ceil(math.log2(count))

        for i in (0, count - 1):
            assert len(merkle_proof(items, i).hashes) == expected

    def test_verification_is_repeatable(self, seven_items):
        root = merkle_root(seven_items)
        proof = merkle_proof(seven_items, 6)

        assert verify_proof(root, proof)
        assert verify_proof(root, proof)

    def test_demo_vector(self, demo_items):
        root = merkle_root(demo_items)
        proof = merkle_proof(demo_items, 0)

        assert verify_proof(root, proof)

        tampered = replace(proof, leaf_content="abd")
        assert not verify_proof(root, tampered)


class TestTamperDetection:
    """Tampered proofs and roots fail verification."""

    def test_tampered_leaf_content_fails(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 2)

        assert not verify_proof(root, replace(proof, leaf_content="x"))

    def test_tampered_byte_leaf_content_fails(self, byte_items):
        root = merkle_root(byte_items)
        proof = merkle_proof(byte_items, 3)

        assert not verify_proof(root, replace(proof, leaf_content=flip_first_byte(proof.leaf_content)))

    def test_every_tampered_sibling_fails(self, seven_items):
        root = merkle_root(seven_items)
        proof = merkle_proof(seven_items, 1)

        for level in range(len(proof.hashes)):
            tampered = with_sibling(proof, level, flip_first_byte(proof.hashes[level]))
            assert not verify_proof(root, tampered), f"level {level}"

    def test_tampered_root_fails(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 0)

        assert not verify_proof(flip_first_byte(root), proof)

    def test_wrong_index_fails(self, byte_items):
        root = merkle_root(byte_items)
        proof = merkle_proof(byte_items, 1)

        assert not verify_proof(root, replace(proof, leaf_index=2))

    def test_root_of_other_tree_fails(self, five_items, seven_items):
        proof = merkle_proof(five_items, 0)
        assert not verify_proof(merkle_root(seven_items), proof)


class TestMalformedProofs:
    """Inconsistent proofs resolve to False instead of raising."""

    def test_truncated_siblings(self, byte_items):
        root = merkle_root(byte_items)
        proof = merkle_proof(byte_items, 3)

        assert not verify_proof(root, replace(proof, hashes=proof.hashes[:-1]))

    def test_extended_siblings(self, byte_items):
        root = merkle_root(byte_items)
        proof = merkle_proof(byte_items, 3)

        assert not verify_proof(root, replace(proof, hashes=proof.hashes + (foreign_digest(),)))

    def test_leaf_count_inconsistent_with_siblings(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 0)

        assert not verify_proof(root, replace(proof, num_of_leaves=16))
        assert not verify_proof(root, replace(proof, num_of_leaves=0))

    def test_index_beyond_leaf_count(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 4)

        assert not verify_proof(root, replace(proof, leaf_index=5))
        assert not verify_proof(root, replace(proof, leaf_index=-1))

    def test_foreign_sibling_at_self_paired_level(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 4)

        assert not verify_proof(root, with_sibling(proof, 0, foreign_digest()))

    def test_short_sibling_digest(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 0)

        assert not verify_proof(root, with_sibling(proof, 0, b"short"))

    def test_non_bytes_values(self, five_items):
        root = merkle_root(five_items)
        proof = merkle_proof(five_items, 0)

        assert not verify_proof(root, with_sibling(proof, 0, proof.hashes[0].hex()))
        assert not verify_proof(root, replace(proof, leaf_content=None))
        assert not verify_proof(root, replace(proof, leaf_index="0"))
        assert not verify_proof(root.hex(), proof)
        assert not verify_proof(None, proof)

    def test_not_a_proof(self, five_items):
        assert not verify_proof(merkle_root(five_items), "proof")

    def test_leaf_content_not_encodable(self):
        items = ["a", "b", "c"]
        root = merkle_root(items)
        proof = replace(merkle_proof(items, 0), leaf_content="\ud800")

        assert not verify_proof(root, proof)

        result = check_proof(root, proof)
        assert not result.ok
        assert result.error.code == "MERKLE_PROOF_INVALID"
        assert "UTF-8" in result.checks[0].message


class TestCheckProof:
    """check_proof() reports the same decision with its checks."""

    def test_valid_proof_passes_all_checks(self, seven_items):
        root = merkle_root(seven_items)
        result = check_proof(root, merkle_proof(seven_items, 4))

        assert result.ok
        assert [c.check_id for c in result.checks] == ["proof_structure", "root_match"]
        assert all(c.ok for c in result.checks)
        assert result.error is None

    def test_root_mismatch_is_reported(self, seven_items):
        proof = merkle_proof(seven_items, 4)
        result = check_proof(foreign_digest(), proof)

        assert not result.ok
        assert result.checks[0].ok
        assert result.get_failed_checks()[0].check_id == "root_match"
        assert result.error.code == "ROOT_MISMATCH"

    def test_malformed_proof_is_reported(self, seven_items):
        root = merkle_root(seven_items)
        proof = merkle_proof(seven_items, 4)
        result = check_proof(root, replace(proof, hashes=()))

        assert not result.ok
        assert result.error_count == 1
        assert result.checks[0].check_id == "proof_structure"
        assert "siblings" in result.get_error_messages()[0]
        assert result.error.code == "MERKLE_PROOF_INVALID"

    def test_agrees_with_verify_proof(self, byte_items):
        root = merkle_root(byte_items)
        good = merkle_proof(byte_items, 5)
        bad = replace(good, leaf_content=b"other")

        assert check_proof(root, good).ok == verify_proof(root, good) is True
        assert check_proof(root, bad).ok == verify_proof(root, bad) is False

    def test_malformed_root_is_not_a_mismatch(self, seven_items):
        proof = merkle_proof(seven_items, 4)
        result = check_proof(b"\x00" * 32, proof)

        assert not result.ok
        assert result.get_failed_checks()[0].check_id == "root_match"
        assert result.error.code == "DIGEST_FORMAT_ERROR"


class TestTreeShape:
    """Tests for compute_tree_depth() and compute_proof_length()."""

    def test_depth_empty(self):
        assert compute_tree_depth(0) == 0

    def test_depth_small_trees(self):
        assert compute_tree_depth(1) == 1
        assert compute_tree_depth(2) == 2
        assert compute_tree_depth(3) == 3
        assert compute_tree_depth(4) == 3

    def test_depth_non_power_of_two(self):
        assert compute_tree_depth(5) == 4
        assert compute_tree_depth(7) == 4
        assert compute_tree_depth(9) == 5

    def test_proof_length(self):
        assert compute_proof_length(0) == 0
        assert compute_proof_length(1) == 0
        assert compute_proof_length(2) == 1
        assert compute_proof_length(5) == 3
        assert compute_proof_length(8) == 3
        assert compute_proof_length(1025) == 11
