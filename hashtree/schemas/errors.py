"""
Schemas - Error taxonomy
File: errors.py

Purpose: Standard error taxonomy for hashtree.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Encoding & serialization errors
    DIGEST_FORMAT_ERROR = "DIGEST_FORMAT_ERROR"
    PROOF_FORMAT_ERROR = "PROOF_FORMAT_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Verification outcomes (reported, never raised)
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Error model for structured error reporting.

    Used where an error has to be serialized instead of raised,
    e.g. the CLI's ``--json`` output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raisable exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hashtree errors.

    Carries structured error information and can be converted
    to a HashTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(HashTreeException, ValueError):
    """Raised when a root or proof is requested for zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeError(HashTreeException, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(
        self,
        leaf_index: int,
        num_of_leaves: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_index"] = leaf_index
        full_details["num_of_leaves"] = num_of_leaves
        super().__init__(
            message=f"Leaf index {leaf_index} out of range for {num_of_leaves} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.leaf_index = leaf_index
        self.num_of_leaves = num_of_leaves


class DigestFormatException(HashTreeException, ValueError):
    """Raised when hex text cannot be decoded into a digest or byte string."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_FORMAT_ERROR,
            details=details,
            retryable=False,
        )


class ProofFormatException(HashTreeException, ValueError):
    """Raised when a serialized proof document cannot be parsed."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Raised when canonical serialization of an object leaf fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
