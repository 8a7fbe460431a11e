"""
Schemas - Proof document
File: proof.py

Purpose: Minimal serialized form of an inclusion proof, so a proof can be
handed to a verifier that never saw the leaves.

Digests are 0x-prefixed lowercase hex. Text leaves are stored as-is with
``leaf_encoding="utf-8"``; byte leaves are stored as 0x hex with
``leaf_encoding="hex"``.
"""

from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from hashtree.crypto.hashing import HASH_ALGORITHM, from_hex, to_hex
from hashtree.merkle.merkle_tree import MerkleProof

from .errors import ProofFormatException


LeafEncoding = Literal["utf-8", "hex"]

# Document layout version; bump when fields change meaning
SchemaVersion = Literal["v1"]
SCHEMA_VERSION: SchemaVersion = "v1"


class ProofDocument(BaseModel):
    """
    Serialized inclusion proof.

    A document that parses is not necessarily a valid proof: shape and
    root checks happen in verify_proof(), which returns False for an
    inconsistent document instead of raising.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    hash_algorithm: Literal["blake2b-512"] = Field(default=HASH_ALGORITHM)
    hashes: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom to top, 0x-prefixed hex",
    )
    num_of_leaves: int = Field(..., ge=0, description="Leaf count at construction time")
    leaf_index: int = Field(..., ge=0, description="Index of the proven leaf")
    leaf_content: str = Field(..., description="Original leaf content (see leaf_encoding)")
    leaf_encoding: LeafEncoding = Field(default="utf-8")

    @field_validator("hashes")
    @classmethod
    def _check_hashes(cls, value: list[str]) -> list[str]:
        for sibling in value:
            from_hex(sibling)
        return value

    @model_validator(mode="after")
    def _check_leaf_content(self) -> "ProofDocument":
        if self.leaf_encoding == "hex":
            from_hex(self.leaf_content)
        return self

    @classmethod
    def from_proof(cls, proof: MerkleProof) -> "ProofDocument":
        """Build a document from an in-memory proof."""
        if isinstance(proof.leaf_content, str):
            leaf_content, leaf_encoding = proof.leaf_content, "utf-8"
        else:
            leaf_content, leaf_encoding = to_hex(proof.leaf_content), "hex"

        return cls(
            hashes=[to_hex(sibling) for sibling in proof.hashes],
            num_of_leaves=proof.num_of_leaves,
            leaf_index=proof.leaf_index,
            leaf_content=leaf_content,
            leaf_encoding=leaf_encoding,
        )

    def to_proof(self) -> MerkleProof:
        """Convert back into an in-memory proof."""
        if self.leaf_encoding == "hex":
            leaf_content: bytes | str = from_hex(self.leaf_content)
        else:
            leaf_content = self.leaf_content

        return MerkleProof(
            hashes=tuple(from_hex(sibling) for sibling in self.hashes),
            num_of_leaves=self.num_of_leaves,
            leaf_index=self.leaf_index,
            leaf_content=leaf_content,
        )

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON text."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> "ProofDocument":
        """
        Parse a proof document from JSON text.

        Raises:
            ProofFormatException: If the text is not valid JSON or does not
                match the document schema
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ProofFormatException(f"Proof document is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ProofFormatException(
                f"Proof document must be a JSON object, got {type(data).__name__}",
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field_path = ".".join(str(part) for part in first.get("loc", ()))
            raise ProofFormatException(
                f"Invalid proof document: {first.get('msg', str(e))}",
                field_path=field_path or None,
                details={"error_count": e.error_count()},
            ) from e


__all__ = [
    "LeafEncoding",
    "SCHEMA_VERSION",
    "SchemaVersion",
    "ProofDocument",
]
