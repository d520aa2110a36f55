"""
AWS Signer Client Interface

The two AWS Signer operations the plugin depends on, expressed as a
structural protocol so the signing and verification paths can run against
the boto3 adapter or any test double.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SignPayloadResult:
    """Output of a SignPayload call."""

    signature: bytes
    metadata: dict[str, str] | None = field(default=None)


@runtime_checkable
class SignerClient(Protocol):
    """Operations consumed from AWS Signer."""

    def sign_payload(
        self,
        profile_name: str,
        account_id: str,
        payload: bytes,
        payload_format: str,
    ) -> SignPayloadResult:
        """Sign ``payload`` with the named signing profile owned by ``account_id``."""
        ...

    def get_revocation_status(
        self,
        certificate_hashes: list[str],
        job_arn: str,
        platform_id: str,
        profile_version_arn: str,
        signature_timestamp: datetime,
    ) -> list[str]:
        """Return the revoked entities among the given job, profile version and certificates."""
        ...
