"""
notation-awssigner - AWS Signer plugin for Notation

Signs artifacts through AWS Signer's SignPayload API and provides extended
signature verification (trusted identity and revocation checks) for
signatures produced by AWS Signer.
"""

import logging

from .version import __version__

from .contract import (
    CONTRACT_VERSION,
    PLUGIN_NAME,
    Capability,
    CriticalAttributes,
    GenerateEnvelopeRequest,
    GenerateEnvelopeResponse,
    GetMetadataResponse,
    Signature,
    TrustPolicy,
    VerificationResult,
    VerifySignatureRequest,
    VerifySignatureResponse,
)
from .exceptions import (
    AccessDeniedError,
    ErrorCode,
    GenericError,
    PluginError,
    ThrottledError,
    UnsupportedContractVersionError,
    UnsupportedError,
    ValidationError,
)
from .plugin import AWSSignerPlugin

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "AWSSignerPlugin",
    # Contract
    "CONTRACT_VERSION",
    "PLUGIN_NAME",
    "Capability",
    "CriticalAttributes",
    "GenerateEnvelopeRequest",
    "GenerateEnvelopeResponse",
    "GetMetadataResponse",
    "Signature",
    "TrustPolicy",
    "VerificationResult",
    "VerifySignatureRequest",
    "VerifySignatureResponse",
    # Errors
    "AccessDeniedError",
    "ErrorCode",
    "GenericError",
    "PluginError",
    "ThrottledError",
    "UnsupportedContractVersionError",
    "UnsupportedError",
    "ValidationError",
]
