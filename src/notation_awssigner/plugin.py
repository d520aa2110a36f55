"""
AWS Signer Notation plugin

The contract operations exposed to the Notation plugin framework. Each
request is validated before the AWS Signer client is touched; the client is
created lazily from the first request's plugin config and reused.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from notation_awssigner.client import SignerClient, SignerClientConfig, new_signer_client
from notation_awssigner.contract import (
    CONTRACT_VERSION,
    PLUGIN_DESCRIPTION,
    PLUGIN_NAME,
    PLUGIN_URL,
    Capability,
    DescribeKeyRequest,
    GenerateEnvelopeRequest,
    GenerateEnvelopeResponse,
    GenerateSignatureRequest,
    GetMetadataResponse,
    VerifySignatureRequest,
    VerifySignatureResponse,
)
from notation_awssigner.exceptions import UnsupportedError, ValidationError
from notation_awssigner.signer import EnvelopeGenerator
from notation_awssigner.validation import validate_signing_request, validate_verification_request
from notation_awssigner.verifier import Verifier
from notation_awssigner.version import get_version

ClientFactory = Callable[[SignerClientConfig], SignerClient]


class AWSSignerPlugin:
    """Notation plugin backed by AWS Signer.

    Args:
        client: AWS Signer client to use. When omitted, one is created on
            first use from the request's plugin config.
        logger: Logger passed to the signing and verification components.
        client_factory: Builds the client when none was injected.
    """

    def __init__(
        self,
        client: Optional[SignerClient] = None,
        logger: Optional[logging.Logger] = None,
        client_factory: ClientFactory = new_signer_client,
    ) -> None:
        self._client = client
        self._client_lock = threading.Lock()
        self._client_factory = client_factory
        self._logger = logger or logging.getLogger(__name__)

    def get_metadata(self, request: object = None) -> GetMetadataResponse:
        """Describe the plugin. The request is ignored."""
        return GetMetadataResponse(
            name=PLUGIN_NAME,
            description=PLUGIN_DESCRIPTION,
            version=get_version(),
            url=PLUGIN_URL,
            supported_contract_versions=[CONTRACT_VERSION],
            capabilities=[
                Capability.ENVELOPE_GENERATOR.value,
                Capability.TRUSTED_IDENTITY_VERIFIER.value,
                Capability.REVOCATION_CHECK_VERIFIER.value,
            ],
        )

    def generate_envelope(
        self, request: Optional[GenerateEnvelopeRequest]
    ) -> GenerateEnvelopeResponse:
        """Sign a payload with AWS Signer and return the signature envelope."""
        if request is None:
            raise ValidationError("GenerateEnvelopeRequest is required")
        validate_signing_request(request)
        client = self._get_client(request.plugin_config)
        return EnvelopeGenerator(client, self._logger).generate_envelope(request)

    def verify_signature(
        self, request: Optional[VerifySignatureRequest]
    ) -> VerifySignatureResponse:
        """Run trusted identity and revocation checks on a signature."""
        if request is None:
            raise ValidationError("VerifySignatureRequest is required")
        validate_verification_request(request)
        client = self._get_client(request.plugin_config)
        return Verifier(client, self._logger).verify(request)

    def generate_signature(self, request: Optional[GenerateSignatureRequest] = None) -> None:
        raise UnsupportedError("GenerateSignature operation")

    def describe_key(self, request: Optional[DescribeKeyRequest] = None) -> None:
        raise UnsupportedError("DescribeKey operation")

    def _get_client(self, plugin_config: dict[str, str]) -> SignerClient:
        """Return the AWS Signer client, creating it once if not present."""
        if self._client is not None:
            return self._client
        with self._client_lock:
            if self._client is None:
                self._client = self._client_factory(
                    SignerClientConfig.from_plugin_config(plugin_config)
                )
            return self._client
