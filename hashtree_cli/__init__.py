"""
hashtree CLI

Command-line interface for hashtree.

Usage:
    python -m hashtree_cli root a b c d e
    python -m hashtree_cli prove a b c d e --index 1 --out proof.json
    python -m hashtree_cli verify proof.json --root 0x...
    python -m hashtree_cli demo
"""

__version__ = "0.1.0"
