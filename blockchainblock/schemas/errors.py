"""
Schemas & Encoding
File: errors.py

Purpose: Standard error taxonomy for block construction and verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Encoding Errors
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Block Errors
    BLOCK_VALIDATION_ERROR = "BLOCK_VALIDATION_ERROR"

    # Merkle Errors
    EMPTY_LEAVES = "EMPTY_LEAVES"

    # Chain Errors
    CHAIN_LINK_INVALID = "CHAIN_LINK_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class BlockchainError(BaseModel):
    """
    Base error model for structured error communication.

    Consumers (storage, transport) can pass these around and serialize
    them without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.BLOCK_VALIDATION_ERROR],
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

    def to_exception(self) -> "BlockchainException":
        """Convert this error model to a raised exception."""
        return BlockchainException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class BlockValidationError(BlockchainError):
    """Error model for invalid block header fields."""

    code: str = Field(default=ErrorCodes.BLOCK_VALIDATION_ERROR)
    field_path: str | None = Field(
        default=None,
        description="Name of the header field that failed validation",
    )
    expected: str | None = Field(default=None)
    actual: str | None = Field(default=None)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BlockchainException(Exception):
    """
    Base exception for all blockchainblock errors.

    This exception carries structured error information and can be
    converted to/from BlockchainError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "BLOCKCHAIN_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> BlockchainError:
        """Convert this exception to a BlockchainError model."""
        return BlockchainError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class SerializationException(BlockchainException):
    """Exception raised when a payload value has no byte representation."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SERIALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class CanonicalizationException(BlockchainException):
    """Exception raised when canonical JSON serialization fails."""

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


class EmptyLeavesException(BlockchainException):
    """Exception raised when a Merkle root is requested over no leaves."""

    def __init__(
        self,
        message: str = "Cannot compute a Merkle root over an empty leaf sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_LEAVES,
            details=details,
            retryable=False,
        )


class BlockValidationException(BlockchainException):
    """Exception raised when block header fields are out of range or malformed."""

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
            code=ErrorCodes.BLOCK_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )
        self.field_path = field_path

    def to_error_model(self) -> BlockValidationError:
        return BlockValidationError(
            message=self.message,
            details=self.details,
            field_path=self.field_path,
            expected=self.details.get("expected"),
            actual=self.details.get("actual"),
        )


class ChainLinkException(BlockchainException):
    """Exception raised when a block does not link to its predecessor."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.CHAIN_LINK_INVALID,
            details=full_details,
            retryable=False,
        )
