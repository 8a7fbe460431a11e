"""
CLI Demo Command

Reference run of the three operations: compute a root, prove the first
item, verify the proof and report the result.

Usage:
    hashtree demo [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.merkle.merkle_proofs import MerkleTree
from hashtree.schemas.proof import ProofDocument
from hashtree_cli.output import print_json


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2

DEMO_DATA = ["abc", "bcd", "cde", "def", "efg"]


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    output_json = args.json or args.cli_config.output_format == "json"

    root = MerkleTree.merkle_root(DEMO_DATA)
    proof = MerkleTree.merkle_proof(DEMO_DATA, 0)
    is_valid = MerkleTree.verify_proof(root, proof)

    document = ProofDocument.from_proof(proof)

    if output_json:
        print_json({
            "data": DEMO_DATA,
            "root": to_hex(root),
            "proof": json.loads(document.to_json()),
            "valid": is_valid,
        })
    else:
        print(f"Merkle Root: {to_hex(root)}")
        print(f"Merkle Proof: {document.to_json()}")
        print(f"Is proof valid? {str(is_valid).lower()}")

    return EXIT_SUCCESS if is_valid else EXIT_VERIFICATION_FAILED
