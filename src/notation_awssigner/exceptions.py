# Copyright Amazon.com Inc. or its affiliates. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
"""Closed error taxonomy for the AWS Signer Notation plugin.

Every failure surfaced to the Notation plugin framework is a PluginError
carrying one ErrorCode. Validation and unsupported errors are raised before
any call to AWS Signer; backend errors are translated by
``notation_awssigner.errors.map_client_error``.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error kinds understood by the plugin framework."""

    VALIDATION = "VALIDATION_ERROR"
    UNSUPPORTED = "UNSUPPORTED"
    UNSUPPORTED_CONTRACT_VERSION = "UNSUPPORTED_CONTRACT_VERSION"
    ACCESS_DENIED = "ACCESS_DENIED"
    THROTTLED = "THROTTLED"
    GENERIC = "ERROR"

    @property
    def wire_code(self) -> str:
        """Error code as written in the plugin error body.

        The contract has no dedicated unsupported code, so unsupported
        operations travel as validation errors.
        """
        if self is ErrorCode.UNSUPPORTED:
            return ErrorCode.VALIDATION.value
        return self.value


class PluginError(Exception):
    """Base exception for all plugin errors."""

    code: ErrorCode = ErrorCode.GENERIC

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the contract error body."""
        return {"errorCode": self.code.wire_code, "errorMessage": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class ValidationError(PluginError):
    """Malformed input. The caller's fault, never retried."""

    code = ErrorCode.VALIDATION


class UnsupportedError(PluginError):
    """Operation, media type or signing scheme not implemented by this plugin."""

    code = ErrorCode.UNSUPPORTED

    def __init__(self, subject: str) -> None:
        super().__init__(f"{subject} is not supported")


class UnsupportedContractVersionError(PluginError):
    """Request was made with a plugin contract version this plugin does not speak."""

    code = ErrorCode.UNSUPPORTED_CONTRACT_VERSION

    def __init__(self, version: str) -> None:
        super().__init__(f'"{version}" is not a supported notary plugin contract version')
        self.version = version


class AccessDeniedError(PluginError):
    """AWS Signer denied access to the requested resource."""

    code = ErrorCode.ACCESS_DENIED


class ThrottledError(PluginError):
    """AWS Signer throttled the request."""

    code = ErrorCode.THROTTLED


class GenericError(PluginError):
    """Opaque backend or environment failure."""

    code = ErrorCode.GENERIC


__all__ = [
    "ErrorCode",
    "PluginError",
    "ValidationError",
    "UnsupportedError",
    "UnsupportedContractVersionError",
    "AccessDeniedError",
    "ThrottledError",
    "GenericError",
]
