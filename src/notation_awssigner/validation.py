"""
Request validation

Structural and protocol checks applied to contract requests before any call
to AWS Signer is made.
"""

from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from notation_awssigner.contract import (
    CONTRACT_VERSION,
    MEDIA_TYPE_JWS_ENVELOPE,
    SIGNING_SCHEME_AUTHORITY,
    VERIFICATION_CAPABILITIES,
    WILDCARD_IDENTITY,
    GenerateEnvelopeRequest,
    VerifySignatureRequest,
)
from notation_awssigner.exceptions import (
    UnsupportedContractVersionError,
    UnsupportedError,
    ValidationError,
)

ERR_MSG_EXPIRY_PASSED = (
    "AWSSigner plugin doesn't support -e (--expiry) argument. "
    "Please use signing profile to set signature expiry."
)
ERR_MSG_WILDCARD_IDENTITY = (
    "The AWSSigner plugin does not support wildcard identity in the trust policy."
)
ERR_MSG_MISSING_SIGNING_TIME = "missing authenticSigningTime"
ERR_MSG_ATTRIBUTE_PARSE = 'unable to parse attribute "{}".'


def validate_signing_request(request: GenerateEnvelopeRequest) -> None:
    """Check a GenerateEnvelope request.

    Raises:
        ValidationError: If an expiry duration was requested.
        UnsupportedContractVersionError: On contract version mismatch.
        UnsupportedError: If the envelope type is not JWS.
    """
    if request.expiry_duration_in_seconds != 0:
        raise ValidationError(ERR_MSG_EXPIRY_PASSED)
    if request.contract_version != CONTRACT_VERSION:
        raise UnsupportedContractVersionError(request.contract_version)
    if request.signature_envelope_type != MEDIA_TYPE_JWS_ENVELOPE:
        raise UnsupportedError(f'envelope type "{request.signature_envelope_type}"')


def validate_verification_request(request: VerifySignatureRequest) -> None:
    """Check a VerifySignature request.

    Raises:
        UnsupportedContractVersionError: On contract version mismatch.
        ValidationError: For a wildcard trusted identity, an unknown
            capability or a missing authentic signing time.
        UnsupportedError: If the signing scheme is not the signing authority scheme.
    """
    if request.contract_version != CONTRACT_VERSION:
        raise UnsupportedContractVersionError(request.contract_version)

    policy = request.trust_policy
    if WILDCARD_IDENTITY in policy.trusted_identities:
        raise ValidationError(ERR_MSG_WILDCARD_IDENTITY)

    for capability in policy.signature_verification:
        if capability not in VERIFICATION_CAPABILITIES:
            raise ValidationError(f"'{capability}' is not a supported plugin capability")

    attributes = request.signature.critical_attributes
    if is_zero_time(attributes.authentic_signing_time):
        raise ValidationError(ERR_MSG_MISSING_SIGNING_TIME)

    if attributes.signing_scheme.casefold() != SIGNING_SCHEME_AUTHORITY.casefold():
        raise UnsupportedError(f"'{attributes.signing_scheme}' signing scheme")


def is_zero_time(value: Optional[datetime]) -> bool:
    """True for an absent timestamp or the zero instant (0001-01-01T00:00:00 UTC).

    Aware values are compared as instants, whatever their offset.
    """
    if value is None:
        return True
    offset = value.utcoffset() or timedelta(0)
    return value.replace(tzinfo=None) - datetime.min == offset


def get_string_attribute(attributes: Mapping[str, Any], key: str) -> str:
    """Return the string value of an extended attribute.

    Raises:
        ValidationError: If the attribute is absent or not a string.
    """
    value = attributes.get(key)
    if not isinstance(value, str):
        raise ValidationError(ERR_MSG_ATTRIBUTE_PARSE.format(key))
    return value
