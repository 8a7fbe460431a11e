"""
CLI leaf input helpers.

Items come either from positional arguments or from a file holding one
item per line.
"""

from __future__ import annotations

from pathlib import Path

from hashtree.crypto.hashing import from_hex


def split_lines(text: str) -> list[str]:
    """
    Split file text into items, one per ``\\n``-terminated line.

    Only ``\\n`` (or ``\\r\\n``) separates items; form feeds and Unicode
    line separators stay inside the item.
    A final line break does not start an extra item.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_items(
    items: list[str] | None,
    file: str | None = None,
    encoding: str = "utf-8",
) -> list[bytes | str]:
    """
    Collect leaf items for a command.

    Args:
        items: Positional items from the command line
        file: Optional path; each line (without its line break) is one item
        encoding: "utf-8" keeps items as text, "hex" decodes 0x-prefixed hex

    Returns:
        Leaf items in order: positional items first, then file lines

    Raises:
        FileNotFoundError: If file does not exist
        DigestFormatException: If encoding is "hex" and an item is not hex
    """
    raw: list[str] = list(items or [])

    if file:
        path = Path(file)
        if not path.exists():
            raise FileNotFoundError(f"Items file not found: {path}")
        with open(path, "r", encoding="utf-8", newline="") as f:
            raw.extend(split_lines(f.read()))

    if encoding == "hex":
        return [from_hex(item) for item in raw]
    return list(raw)
