"""
Signature verification

Extended verification for signatures generated by AWS Signer: trusted
identity matching against signing profile ARNs and revocation checking of
the signing job, signing profile version and certificate chain.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Optional, Sequence

from cryptography import x509

from notation_awssigner.arn import as_signing_profile_arn
from notation_awssigner.client.interface import SignerClient
from notation_awssigner.contract import (
    ATTR_SIGNING_JOB,
    ATTR_SIGNING_PROFILE_VERSION,
    PLATFORM_NOTATION,
    Capability,
    VerificationResult,
    VerifySignatureRequest,
    VerifySignatureResponse,
)
from notation_awssigner.exceptions import ValidationError
from notation_awssigner.validation import get_string_attribute, validate_verification_request

ERR_MSG_CERTIFICATE_PARSE = "unable to parse certificates in certificate chain."

REASON_TRUSTED_IDENTITY_FAILURE = "Signature publisher doesn't match any trusted identities."
REASON_TRUSTED_IDENTITY_SUCCESS = 'Signature publisher matched "{}" trusted identity.'
REASON_NOT_REVOKED = "Signature is not revoked."
REASON_REVOKED_RESOURCE = "Resource(s) {} have been revoked."
REASON_REVOKED_CERTIFICATE = "Certificate(s) have been revoked."
REASON_REVOCATION_CALL_FAILED = "GetRevocationStatus call failed with error: {}"

# Resource path lengths of "/signing-profiles/<name>" and
# "/signing-profiles/<name>/<version>" after splitting on "/".
_PROFILE_SEGMENTS = 3
_PROFILE_VERSION_SEGMENTS = 4


def match_trusted_identity(
    signature_identity: str, trusted_identities: Sequence[str]
) -> VerificationResult:
    """Match a signing profile version ARN against trusted identity patterns.

    A signing profile ARN matches every version of that profile; a signing
    profile version ARN matches only that version. Comparison is
    case-insensitive and the first matching pattern in policy order wins.
    Patterns that are not signing profile ARNs are ignored.
    """
    slash = signature_identity.rfind("/")
    signature_profile = signature_identity[:slash] if slash != -1 else None

    for identity in trusted_identities:
        parsed = as_signing_profile_arn(identity)
        if parsed is None:
            continue

        segments = len(parsed.resource_segments())
        if segments == _PROFILE_SEGMENTS:
            matched = (
                signature_profile is not None
                and signature_profile.casefold() == identity.casefold()
            )
        elif segments == _PROFILE_VERSION_SEGMENTS:
            matched = signature_identity.casefold() == identity.casefold()
        else:
            matched = False

        if matched:
            return VerificationResult(
                success=True, reason=REASON_TRUSTED_IDENTITY_SUCCESS.format(identity)
            )

    return VerificationResult(success=False, reason=REASON_TRUSTED_IDENTITY_FAILURE)


def hash_certificate(certificate: x509.Certificate) -> str:
    """SHA-384 of the certificate's to-be-signed body, as lowercase hex."""
    return hashlib.sha384(certificate.tbs_certificate_bytes).hexdigest()


def hash_certificates(certificate_chain: Sequence[bytes]) -> list[str]:
    """Build the hash chain sent to GetRevocationStatus.

    Entry ``i`` is ``digest[i] + digest[i + 1]``; the last entry is its own
    digest repeated.

    Raises:
        ValueError: If any certificate is not valid DER.
    """
    digests = [hash_certificate(x509.load_der_x509_certificate(der)) for der in certificate_chain]
    chain = []
    for i, digest in enumerate(digests):
        if i == len(digests) - 1:
            chain.append(digest + digest)
        else:
            chain.append(digest + digests[i + 1])
    return chain


def revocation_reason(revoked_entities: Sequence[str]) -> str:
    """Describe revoked entities.

    ARNs are listed by name; any certificate hash contributes a single
    fixed sentence.
    """
    resources = [entity for entity in revoked_entities if entity.startswith("arn")]
    certificate_revoked = len(resources) != len(revoked_entities)

    reason = ""
    if resources:
        reason = REASON_REVOKED_RESOURCE.format(", ".join(resources))
    if certificate_revoked:
        reason += REASON_REVOKED_CERTIFICATE
    return reason


class RevocationChecker:
    """Queries AWS Signer for the revocation status of a signature.

    Args:
        client: AWS Signer client.
        logger: Logger for debug output. Defaults to this module's logger.
    """

    def __init__(self, client: SignerClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def check(self, request: VerifySignatureRequest) -> VerificationResult:
        """Return the revocation verification result for ``request``.

        A failed GetRevocationStatus call is reported in the result rather
        than raised.

        Raises:
            ValidationError: If the signing attributes are missing or the
                certificate chain cannot be parsed.
        """
        attributes = request.signature.critical_attributes
        profile_version_arn = get_string_attribute(
            attributes.extended_attributes, ATTR_SIGNING_PROFILE_VERSION
        )
        job_arn = get_string_attribute(attributes.extended_attributes, ATTR_SIGNING_JOB)

        try:
            certificate_hashes = hash_certificates(request.signature.certificate_chain)
        except ValueError as exc:
            raise ValidationError(ERR_MSG_CERTIFICATE_PARSE) from exc

        try:
            revoked_entities = self._client.get_revocation_status(
                certificate_hashes=certificate_hashes,
                job_arn=job_arn,
                platform_id=PLATFORM_NOTATION,
                profile_version_arn=profile_version_arn,
                signature_timestamp=attributes.authentic_signing_time,
            )
        except Exception as exc:
            self._logger.debug("GetRevocationStatus call failed: %s", exc)
            return VerificationResult(
                success=False, reason=REASON_REVOCATION_CALL_FAILED.format(exc)
            )

        if revoked_entities:
            self._logger.debug("revoked entities: %s", revoked_entities)
            return VerificationResult(success=False, reason=revocation_reason(revoked_entities))
        return VerificationResult(success=True, reason=REASON_NOT_REVOKED)


class Verifier:
    """Runs the verification capabilities requested by a trust policy.

    Args:
        client: AWS Signer client used for revocation checks.
        logger: Logger for debug output. Defaults to this module's logger.
    """

    def __init__(self, client: SignerClient, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._revocation = RevocationChecker(client, self._logger)

    def verify(self, request: VerifySignatureRequest) -> VerifySignatureResponse:
        """Verify trusted identity and revocation status as requested.

        Raises:
            PluginError: If the request fails validation.
        """
        self._logger.debug("validating VerifySignatureRequest")
        validate_verification_request(request)

        requested = request.trust_policy.signature_verification
        response = VerifySignatureResponse()

        if Capability.TRUSTED_IDENTITY_VERIFIER in requested:
            self._logger.debug("validating trusted identity")
            signature_identity = get_string_attribute(
                request.signature.critical_attributes.extended_attributes,
                ATTR_SIGNING_PROFILE_VERSION,
            )
            response.verification_results[Capability.TRUSTED_IDENTITY_VERIFIER.value] = (
                match_trusted_identity(signature_identity, request.trust_policy.trusted_identities)
            )

        if Capability.REVOCATION_CHECK_VERIFIER in requested:
            self._logger.debug("validating revocation status")
            response.verification_results[Capability.REVOCATION_CHECK_VERIFIER.value] = (
                self._revocation.check(request)
            )

        # Both attributes count as processed even when the revocation check was not requested.
        response.mark_processed(ATTR_SIGNING_PROFILE_VERSION)
        response.mark_processed(ATTR_SIGNING_JOB)
        self._logger.debug("verification response: %s", response)
        return response
