"""
CLI output helpers shared by the commands.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from hashtree.schemas.errors import HashTreeError, HashTreeException


def print_json(data: Any) -> None:
    """Print a JSON document to stdout."""
    print(json.dumps(data, indent=2))


def print_error(error: Exception, output_json: bool = False) -> None:
    """
    Report an error to the user.

    With ``output_json`` the error is printed to stdout as a structured
    HashTreeError document; otherwise a one-line message goes to stderr.
    """
    if not output_json:
        print(f"Error: {error}", file=sys.stderr)
        return

    if isinstance(error, HashTreeException):
        model = error.to_error_model()
    else:
        model = HashTreeError(code=type(error).__name__, message=str(error))
    print_json({"ok": False, "error": model.model_dump(mode="json")})
