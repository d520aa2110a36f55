"""Shared fixtures for the AWS Signer plugin tests."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from notation_awssigner.client import SignPayloadResult
from notation_awssigner.contract import (
    ATTR_SIGNING_JOB,
    ATTR_SIGNING_PROFILE_VERSION,
    CONTRACT_VERSION,
    MEDIA_TYPE_JWS_ENVELOPE,
    SIGNING_SCHEME_AUTHORITY,
    Capability,
    CriticalAttributes,
    GenerateEnvelopeRequest,
    Signature,
    TrustPolicy,
    VerifySignatureRequest,
)

TEST_PROFILE_ARN = (
    "arn:aws:signer:us-west-2:000000000000:/signing-profiles/NotaryPluginIntegProfile"
)
TEST_PROFILE_VERSION_ARN = TEST_PROFILE_ARN + "/OF8IVUsPJq"
TEST_JOB_ARN = (
    "arn:aws:signer:us-west-2:000000000000:/signing-jobs/97af3947-e7b2-4533-8d9d-6741156f0b79"
)
TEST_SIGNING_PROFILE_KEY_ID = (
    "arn:aws:signer:us-west-2:780792624090:/signing-profiles/NotationProfile"
)
TEST_PAYLOAD_TYPE = "application/vnd.oci.descriptor.v1+json"


class FakeSignerClient:
    """In-memory AWS Signer client recording every call."""

    def __init__(
        self,
        signature: bytes = b"sigEnv",
        metadata: Optional[dict[str, str]] = None,
        revoked_entities: Optional[list[str]] = None,
        sign_error: Optional[Exception] = None,
        revocation_error: Optional[Exception] = None,
    ) -> None:
        self.signature = signature
        self.metadata = metadata
        self.revoked_entities = revoked_entities or []
        self.sign_error = sign_error
        self.revocation_error = revocation_error
        self.sign_calls: list[dict] = []
        self.revocation_calls: list[dict] = []

    def sign_payload(self, profile_name, account_id, payload, payload_format):
        self.sign_calls.append(
            {
                "profile_name": profile_name,
                "account_id": account_id,
                "payload": payload,
                "payload_format": payload_format,
            }
        )
        if self.sign_error is not None:
            raise self.sign_error
        return SignPayloadResult(signature=self.signature, metadata=self.metadata)

    def get_revocation_status(
        self, certificate_hashes, job_arn, platform_id, profile_version_arn, signature_timestamp
    ):
        self.revocation_calls.append(
            {
                "certificate_hashes": certificate_hashes,
                "job_arn": job_arn,
                "platform_id": platform_id,
                "profile_version_arn": profile_version_arn,
                "signature_timestamp": signature_timestamp,
            }
        )
        if self.revocation_error is not None:
            raise self.revocation_error
        return list(self.revoked_entities)

    @property
    def call_count(self) -> int:
        return len(self.sign_calls) + len(self.revocation_calls)


def make_certificate(common_name: str) -> x509.Certificate:
    """Create a self-signed ECDSA P-384 certificate."""
    key = ec.generate_private_key(ec.SECP384R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA384())
    )


def der(certificate: x509.Certificate) -> bytes:
    return certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def certificates() -> list[x509.Certificate]:
    """Leaf, intermediate and root certificates."""
    return [make_certificate(cn) for cn in ("leaf", "intermediate", "root")]


@pytest.fixture(scope="session")
def certificate_chain(certificates) -> list[bytes]:
    return [der(cert) for cert in certificates]


@pytest.fixture
def signer_client() -> FakeSignerClient:
    return FakeSignerClient()


@pytest.fixture
def verify_request(certificate_chain) -> VerifySignatureRequest:
    return make_verify_request(certificate_chain)


@pytest.fixture
def envelope_request() -> GenerateEnvelopeRequest:
    return make_envelope_request()


def make_verify_request(
    certificate_chain: list[bytes],
    trusted_identities: Optional[list[str]] = None,
    capabilities: Optional[list[str]] = None,
    extended_attributes: Optional[dict] = None,
    **critical_overrides,
) -> VerifySignatureRequest:
    now = datetime.now(timezone.utc)
    if extended_attributes is None:
        extended_attributes = {
            ATTR_SIGNING_JOB: TEST_JOB_ARN,
            ATTR_SIGNING_PROFILE_VERSION: TEST_PROFILE_VERSION_ARN,
        }
    critical = {
        "content_type": "application/vnd.cncf.notary.payload.v1+json",
        "signing_scheme": SIGNING_SCHEME_AUTHORITY,
        "authentic_signing_time": now,
        "expiry": now,
        "extended_attributes": extended_attributes,
    }
    critical.update(critical_overrides)
    return VerifySignatureRequest(
        contract_version=CONTRACT_VERSION,
        signature=Signature(
            critical_attributes=CriticalAttributes(**critical),
            unprocessed_attributes=[ATTR_SIGNING_JOB, ATTR_SIGNING_PROFILE_VERSION],
            certificate_chain=certificate_chain,
        ),
        trust_policy=TrustPolicy(
            trusted_identities=[TEST_PROFILE_ARN] if trusted_identities is None else trusted_identities,
            signature_verification=capabilities
            if capabilities is not None
            else [
                Capability.TRUSTED_IDENTITY_VERIFIER.value,
                Capability.REVOCATION_CHECK_VERIFIER.value,
            ],
        ),
    )


def make_envelope_request(**overrides) -> GenerateEnvelopeRequest:
    fields = {
        "contract_version": CONTRACT_VERSION,
        "signature_envelope_type": MEDIA_TYPE_JWS_ENVELOPE,
        "payload": b"sigME!",
        "payload_type": TEST_PAYLOAD_TYPE,
        "key_id": TEST_SIGNING_PROFILE_KEY_ID,
    }
    fields.update(overrides)
    return GenerateEnvelopeRequest(**fields)
