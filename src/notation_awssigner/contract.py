"""
Notation Plugin Contract

Constants and request/response models for the Notation plugin contract,
version 1.0. Models use the contract's camelCase field names on the wire
and snake_case attribute names in Python.
"""

import base64
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

CONTRACT_VERSION = "1.0"

PLUGIN_NAME = "com.amazonaws.signer.notation.plugin"
PLUGIN_DESCRIPTION = "AWS Signer plugin for Notation"
PLUGIN_URL = "https://docs.aws.amazon.com/signer"

MEDIA_TYPE_JWS_ENVELOPE = "application/jose+json"
SIGNING_SCHEME_AUTHORITY = "notary.x509.signingAuthority"

ATTR_SIGNING_PROFILE_VERSION = "com.amazonaws.signer.signingProfileVersion"
ATTR_SIGNING_JOB = "com.amazonaws.signer.signingJob"

PLATFORM_NOTATION = "Notation-OCI-SHA384-ECDSA"

WILDCARD_IDENTITY = "*"


class Capability(str, Enum):
    """Plugin capabilities defined by the contract."""

    ENVELOPE_GENERATOR = "SIGNATURE_GENERATOR.ENVELOPE"
    TRUSTED_IDENTITY_VERIFIER = "SIGNATURE_VERIFIER.TRUSTED_IDENTITY"
    REVOCATION_CHECK_VERIFIER = "SIGNATURE_VERIFIER.REVOCATION_CHECK"


VERIFICATION_CAPABILITIES = (
    Capability.TRUSTED_IDENTITY_VERIFIER,
    Capability.REVOCATION_CHECK_VERIFIER,
)


def _decode_base64(value: Any) -> Any:
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    return value


def _encode_base64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# Byte fields travel as standard base64 strings in contract JSON.
Base64Bytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(_encode_base64, return_type=str, when_used="json"),
]


class ContractModel(BaseModel):
    """Base for all contract messages."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the contract's JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GenerateEnvelopeRequest(ContractModel):
    """Request to sign a payload and return a signature envelope."""

    contract_version: str = Field(default="", description="Plugin contract version")
    key_id: str = Field(default="", description="Signing profile or profile version ARN")
    payload: Base64Bytes = Field(default=b"", description="Payload to sign")
    payload_type: str = Field(default="", description="Media type of the payload")
    signature_envelope_type: str = Field(default="", description="Requested envelope media type")
    expiry_duration_in_seconds: int = Field(default=0, description="Requested signature expiry")
    plugin_config: dict[str, str] = Field(default_factory=dict)


class GenerateEnvelopeResponse(ContractModel):
    """Signature envelope produced by AWS Signer."""

    signature_envelope: Base64Bytes
    signature_envelope_type: str
    annotations: Optional[dict[str, str]] = None


class CriticalAttributes(ContractModel):
    """Signed attributes the verifier must understand."""

    content_type: str = ""
    signing_scheme: str = ""
    expiry: Optional[datetime] = None
    authentic_signing_time: Optional[datetime] = None
    extended_attributes: dict[str, Any] = Field(default_factory=dict)


class Signature(ContractModel):
    """Signature under verification, as decoded by the caller."""

    critical_attributes: CriticalAttributes = Field(default_factory=CriticalAttributes)
    unprocessed_attributes: list[str] = Field(default_factory=list)
    certificate_chain: list[Base64Bytes] = Field(
        default_factory=list, description="DER-encoded certificates, leaf first"
    )


class TrustPolicy(ContractModel):
    """Subset of the caller's trust policy relevant to this plugin."""

    trusted_identities: list[str] = Field(default_factory=list)
    signature_verification: list[str] = Field(
        default_factory=list, description="Requested verification capabilities"
    )


class VerifySignatureRequest(ContractModel):
    """Request to run extended verification on a signature."""

    contract_version: str = ""
    signature: Signature = Field(default_factory=Signature)
    trust_policy: TrustPolicy = Field(default_factory=TrustPolicy)
    plugin_config: dict[str, str] = Field(default_factory=dict)


class VerificationResult(ContractModel):
    """Outcome of a single verification capability."""

    success: bool
    reason: str


class VerifySignatureResponse(ContractModel):
    """Verification results accumulated while a request is evaluated."""

    model_config = ConfigDict(frozen=False)

    verification_results: dict[str, VerificationResult] = Field(default_factory=dict)
    processed_attributes: list[str] = Field(default_factory=list)

    def mark_processed(self, attribute: str) -> None:
        if attribute not in self.processed_attributes:
            self.processed_attributes.append(attribute)


class GetMetadataResponse(ContractModel):
    """Static plugin descriptor."""

    name: str
    description: str
    version: str
    url: str
    supported_contract_versions: list[str]
    capabilities: list[str]


class DescribeKeyRequest(ContractModel):
    contract_version: str = ""
    key_id: str = ""
    plugin_config: dict[str, str] = Field(default_factory=dict)


class GenerateSignatureRequest(ContractModel):
    contract_version: str = ""
    key_id: str = ""
    key_spec: str = ""
    hash_algorithm: str = ""
    payload: Base64Bytes = b""
    plugin_config: dict[str, str] = Field(default_factory=dict)
