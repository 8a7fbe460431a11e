"""
CLI Root Command

Compute the Merkle root of an ordered list of items.

Usage:
    hashtree root a b c d e [--json]
    hashtree root --file items.txt [--encoding hex]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.merkle.merkle_tree import compute_tree_depth, merkle_root
from hashtree.schemas.errors import HashTreeException
from hashtree_cli.inputs import read_items
from hashtree_cli.output import print_error, print_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    output_json = args.json or config.output_format == "json"
    encoding = args.encoding or config.item_encoding

    try:
        items = read_items(args.items, args.file, encoding)
        root = merkle_root(items)
    except (FileNotFoundError, HashTreeException) as e:
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Computed root over {len(items)} leaves")

    if output_json:
        print_json({
            "ok": True,
            "root": to_hex(root),
            "num_of_leaves": len(items),
            "depth": compute_tree_depth(len(items)),
        })
    else:
        print(to_hex(root))

    return EXIT_SUCCESS
