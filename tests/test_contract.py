"""Tests for contract message serialization."""

import base64
import json

import pydantic
import pytest

from notation_awssigner.contract import (
    GenerateEnvelopeRequest,
    GenerateEnvelopeResponse,
    VerifySignatureRequest,
    VerifySignatureResponse,
    VerificationResult,
)

from conftest import TEST_JOB_ARN, TEST_PROFILE_VERSION_ARN


class TestGenerateEnvelopeMessages:
    def test_parse_request(self):
        raw = json.dumps(
            {
                "contractVersion": "1.0",
                "keyId": "arn:aws:signer:us-west-2:780792624090:/signing-profiles/NotationProfile",
                "payloadType": "application/vnd.oci.descriptor.v1+json",
                "signatureEnvelopeType": "application/jose+json",
                "payload": base64.b64encode(b"sigME!").decode(),
                "pluginConfig": {"aws-region": "us-west-2"},
            }
        )
        request = GenerateEnvelopeRequest.model_validate_json(raw)
        assert request.payload == b"sigME!"
        assert request.expiry_duration_in_seconds == 0
        assert request.plugin_config == {"aws-region": "us-west-2"}

    def test_invalid_base64(self):
        with pytest.raises(pydantic.ValidationError):
            GenerateEnvelopeRequest.model_validate_json('{"payload": "***"}')

    def test_response_wire(self):
        response = GenerateEnvelopeResponse(
            signature_envelope=b"\xfb\xff",
            signature_envelope_type="application/jose+json",
            annotations={"a": "b"},
        )
        # standard alphabet, not URL-safe
        assert response.to_wire()["signatureEnvelope"] == "+/8="

    def test_requests_are_immutable(self):
        request = GenerateEnvelopeRequest()
        with pytest.raises(pydantic.ValidationError):
            request.key_id = "changed"


class TestVerifySignatureMessages:
    def test_parse_request(self):
        raw = json.dumps(
            {
                "contractVersion": "1.0",
                "signature": {
                    "criticalAttributes": {
                        "contentType": "application/vnd.cncf.notary.payload.v1+json",
                        "signingScheme": "notary.x509.signingAuthority",
                        "authenticSigningTime": "2024-03-01T10:00:00Z",
                        "expiry": "2025-03-01T10:00:00Z",
                        "extendedAttributes": {
                            "com.amazonaws.signer.signingJob": TEST_JOB_ARN,
                            "com.amazonaws.signer.signingProfileVersion": TEST_PROFILE_VERSION_ARN,
                        },
                    },
                    "unprocessedAttributes": ["com.amazonaws.signer.signingJob"],
                    "certificateChain": [base64.b64encode(b"\x30\x82").decode()],
                },
                "trustPolicy": {
                    "trustedIdentities": ["x"],
                    "signatureVerification": ["SIGNATURE_VERIFIER.REVOCATION_CHECK"],
                },
            }
        )
        request = VerifySignatureRequest.model_validate_json(raw)
        critical = request.signature.critical_attributes
        assert critical.authentic_signing_time.year == 2024
        assert critical.extended_attributes["com.amazonaws.signer.signingJob"] == TEST_JOB_ARN
        assert request.signature.certificate_chain == [b"\x30\x82"]
        assert request.trust_policy.signature_verification == ["SIGNATURE_VERIFIER.REVOCATION_CHECK"]
        assert request.plugin_config == {}

    def test_response_accumulates(self):
        response = VerifySignatureResponse()
        response.verification_results["cap"] = VerificationResult(success=True, reason="ok")
        response.mark_processed("b")
        response.mark_processed("a")
        response.mark_processed("b")
        assert response.processed_attributes == ["b", "a"]
        assert response.to_wire() == {
            "verificationResults": {"cap": {"success": True, "reason": "ok"}},
            "processedAttributes": ["b", "a"],
        }
