"""
Signature envelope generation

Forwards a GenerateEnvelope request to AWS Signer's SignPayload API and
wraps the returned signature in a contract response.
"""

from __future__ import annotations

import logging
from typing import Optional

from notation_awssigner.arn import Arn, ArnError, parse_arn
from notation_awssigner.client.interface import SignerClient
from notation_awssigner.contract import GenerateEnvelopeRequest, GenerateEnvelopeResponse
from notation_awssigner.errors import map_client_error
from notation_awssigner.exceptions import ValidationError
from notation_awssigner.validation import validate_signing_request

ERR_MSG_MALFORMED_SIGNING_PROFILE = (
    "{} is not a valid AWS Signer signing profile or signing profile version ARN."
)


def get_profile_name(key_id: str) -> tuple[Arn, str]:
    """Parse a signing profile ARN and return it with the profile name.

    The resource must be ``/signing-profiles/<name>``.

    Raises:
        ValidationError: If ``key_id`` is not a signing profile ARN.
    """
    try:
        profile_arn = parse_arn(key_id)
    except ArnError as exc:
        raise ValidationError(ERR_MSG_MALFORMED_SIGNING_PROFILE.format(key_id)) from exc

    segments = profile_arn.resource_segments()
    if len(segments) != 3:
        raise ValidationError(ERR_MSG_MALFORMED_SIGNING_PROFILE.format(key_id))
    return profile_arn, segments[2]


class EnvelopeGenerator:
    """Generates JWS signature envelopes by calling AWS Signer.

    Args:
        client: AWS Signer client.
        logger: Logger for debug output. Defaults to this module's logger.

    Example:
        >>> generator = EnvelopeGenerator(client)
        >>> response = generator.generate_envelope(request)
        >>> response.signature_envelope_type
        'application/jose+json'
    """

    def __init__(self, client: SignerClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def generate_envelope(self, request: GenerateEnvelopeRequest) -> GenerateEnvelopeResponse:
        """Sign the request payload with the signing profile named by ``key_id``.

        Raises:
            PluginError: On validation failure or a mapped AWS Signer error.
        """
        self._logger.debug("validating request")
        validate_signing_request(request)
        profile_arn, profile_name = get_profile_name(request.key_id)
        self._logger.debug("succeeded signing profile validation")

        self._logger.debug("calling AWS Signer's SignPayload API")
        try:
            output = self._client.sign_payload(
                profile_name=profile_name,
                account_id=profile_arn.account_id,
                payload=request.payload,
                payload_format=request.payload_type,
            )
        except Exception as exc:
            self._logger.debug("failed AWS Signer's SignPayload API call with error: %s", exc)
            raise map_client_error(exc) from exc

        response = GenerateEnvelopeResponse(
            signature_envelope=output.signature,
            signature_envelope_type=request.signature_envelope_type,
            annotations=output.metadata,
        )
        self._logger.debug("succeeded AWS Signer's SignPayload API call")
        return response
