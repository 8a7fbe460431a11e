"""
Schemas - Public API

Error taxonomy, canonical serialization and verification results.
ProofDocument lives in ``hashtree.schemas.proof`` and is not
re-exported here because it depends on the merkle package.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    DigestFormatException,
    EmptyInputError,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    IndexOutOfRangeError,
    ProofFormatException,
)

# Verification results
from .verification import (
    CheckResult,
    ProofCheckId,
    VerificationResult,
)


__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "DigestFormatException",
    "EmptyInputError",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "IndexOutOfRangeError",
    "ProofFormatException",
    # Verification
    "CheckResult",
    "ProofCheckId",
    "VerificationResult",
]
