"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for Merkle commitment construction.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    PRECONDITION_VIOLATION = "PRECONDITION_VIOLATION"

    # Tree Errors
    EMPTY_TREE = "EMPTY_TREE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error communication.

    Used when an error has to be reported as data (e.g. the CLI's JSON
    output) rather than raised.
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

    def to_exception(self) -> "MerkleCommitmentException":
        """Convert this error model to a raised exception."""
        return MerkleCommitmentException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleCommitmentException(Exception):
    """
    Base exception for all Merkle commitment errors.

    Carries structured error information and can be converted to/from
    MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(MerkleCommitmentException):
    """Raised when no identifiers remain after deduplication."""

    def __init__(
        self,
        message: str = "No identifiers to commit to",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class EmptyTreeError(MerkleCommitmentException):
    """Raised when a tree is built from zero leaves."""

    def __init__(
        self,
        message: str = "empty tree",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class PreconditionViolation(MerkleCommitmentException):
    """Raised when an identifier cannot be encoded as a fixed-width leaf."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = str(value)
        super().__init__(
            message=message,
            code=ErrorCodes.PRECONDITION_VIOLATION,
            details=full_details,
            retryable=False,
        )


class NotFoundError(MerkleCommitmentException):
    """Raised when a proof is requested for a leaf outside the tree."""

    def __init__(
        self,
        message: str = "Element does not exist in Merkle tree",
        leaf_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hex:
            full_details["leaf"] = leaf_hex
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(MerkleCommitmentException):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )
