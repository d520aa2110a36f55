"""
AWS Signer client

Protocol consumed by the signing and verification paths, plus the
boto3-backed implementation.
"""

from .boto import (
    BotoSignerClient,
    SignerClientConfig,
    new_signer_client,
)
from .interface import SignerClient, SignPayloadResult

__all__ = [
    "BotoSignerClient",
    "SignerClient",
    "SignerClientConfig",
    "SignPayloadResult",
    "new_signer_client",
]
