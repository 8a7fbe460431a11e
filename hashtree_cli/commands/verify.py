"""
CLI Verify Command

Verify a proof document against a trusted root, offline.

Usage:
    hashtree verify proof.json --root 0x... [--json] [--debug]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from hashtree.crypto.hashing import from_hex
from hashtree.merkle.merkle_tree import check_proof
from hashtree.schemas.errors import HashTreeException
from hashtree.schemas.proof import ProofDocument
from hashtree.schemas.verification import VerificationResult
from hashtree_cli.output import print_error, print_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    root: str = ""
    ok: bool = False
    leaf_index: int = 0
    num_of_leaves: int = 0
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["checks"]:
            del d["checks"]
        if not d["errors"]:
            del d["errors"]
        return d


def build_summary(
    proof_path: str,
    root_hex: str,
    document: ProofDocument,
    result: VerificationResult,
    debug: bool = False,
) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    summary = VerifySummary(
        proof_path=proof_path,
        root=root_hex,
        ok=result.ok,
        leaf_index=document.leaf_index,
        num_of_leaves=document.num_of_leaves,
        errors=result.get_error_messages(),
    )

    if debug:
        summary.checks = [
            {"check_id": check.check_id, "ok": check.ok, "message": check.message}
            for check in result.checks
        ]

    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"root: {summary.root}")
    print(f"leaf_index: {summary.leaf_index}")
    print(f"num_of_leaves: {summary.num_of_leaves}")
    print(f"valid: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")

    if summary.checks:
        print("\nchecks:")
        for check in summary.checks:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}: {check['message']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof is valid, EXIT_VERIFICATION_FAILED if it
        is not, EXIT_RUNTIME_ERROR if the inputs could not be read
    """
    config = args.cli_config
    output_json = args.json or config.output_format == "json"
    proof_path = Path(args.proof_path)

    if not proof_path.exists():
        print_error(FileNotFoundError(f"Proof not found: {proof_path}"), output_json)
        return EXIT_RUNTIME_ERROR

    try:
        root = from_hex(args.root)
        document = ProofDocument.from_json(proof_path.read_text(encoding="utf-8"))
    except HashTreeException as e:
        if args.debug:
            logger.exception("Cannot load verification inputs")
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    result = check_proof(root, document.to_proof())
    logger.info(f"Proof for leaf {document.leaf_index} verified: {result.ok}")

    summary = build_summary(str(proof_path), args.root, document, result, args.debug)

    if output_json:
        print_json(summary.to_dict())
    else:
        print_summary_human(summary)

    if not result.ok:
        if not output_json:
            print("\nProof verification failed.", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    return EXIT_SUCCESS
