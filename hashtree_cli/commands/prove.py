"""
CLI Prove Command

Generate an inclusion proof for one item and write it as a proof document.

Usage:
    hashtree prove a b c d e --index 1 [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from hashtree.crypto.hashing import to_hex
from hashtree.merkle.merkle_tree import merkle_proof, merkle_root
from hashtree.schemas.errors import HashTreeException
from hashtree.schemas.proof import ProofDocument
from hashtree_cli.inputs import read_items
from hashtree_cli.output import print_error, print_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    The root is printed alongside the proof; it is the value a verifier
    has to trust independently of the proof document.

    Returns:
        Exit code
    """
    config = args.cli_config
    output_json = args.json or config.output_format == "json"
    encoding = args.encoding or config.item_encoding

    try:
        items = read_items(args.items, args.file, encoding)
        proof = merkle_proof(items, args.index)
        root = merkle_root(items)
    except (FileNotFoundError, HashTreeException) as e:
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    document = ProofDocument.from_proof(proof)

    if args.out:
        out_path = Path(args.out)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(document.to_json() + "\n", encoding="utf-8")
        except OSError as e:
            print_error(e, output_json)
            return EXIT_RUNTIME_ERROR
        logger.info(f"Proof for leaf {proof.leaf_index} written to {out_path}")

    if output_json:
        result = {"ok": True, "root": to_hex(root)}
        if args.out:
            result["proof_path"] = str(args.out)
        else:
            result["proof"] = json.loads(document.to_json())
        print_json(result)
    else:
        print(f"root: {to_hex(root)}")
        print(f"leaf_index: {proof.leaf_index}")
        print(f"num_of_leaves: {proof.num_of_leaves}")
        print(f"siblings: {len(proof.hashes)}")
        if args.out:
            print(f"proof: {args.out}")
        else:
            print(document.to_json())

    return EXIT_SUCCESS
