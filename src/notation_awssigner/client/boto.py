"""
boto3-backed AWS Signer client.

Builds a boto3 ``signer`` client from the plugin configuration passed in
each contract request and adapts it to :class:`SignerClient`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict, Field

from notation_awssigner.client.interface import SignPayloadResult
from notation_awssigner.exceptions import GenericError
from notation_awssigner.version import get_version

logger = logging.getLogger(__name__)

CONFIG_KEY_AWS_PROFILE = "aws-profile"
CONFIG_KEY_AWS_REGION = "aws-region"
CONFIG_KEY_SIGNER_ENDPOINT = "aws-signer-endpoint-url"

SIGNER_SERVICE_NAME = "signer"


class SignerClientConfig(BaseModel):
    """AWS Signer client settings taken from the request's plugin config.

    Attributes:
        profile: Shared credentials/config profile name.
        region: AWS region override.
        endpoint_url: AWS Signer endpoint override.
        connect_timeout: Seconds to wait for a connection.
        read_timeout: Seconds to wait for a response.
    """

    model_config = ConfigDict(frozen=True)

    profile: Optional[str] = Field(default=None, description="AWS credential profile")
    region: Optional[str] = Field(default=None, description="AWS region")
    endpoint_url: Optional[str] = Field(default=None, description="AWS Signer endpoint URL")
    connect_timeout: float = Field(default=60.0, gt=0)
    read_timeout: float = Field(default=60.0, gt=0)

    @classmethod
    def from_plugin_config(cls, plugin_config: dict[str, str] | None) -> "SignerClientConfig":
        """Read the recognised keys out of a contract ``pluginConfig`` mapping."""
        plugin_config = plugin_config or {}
        return cls(
            profile=plugin_config.get(CONFIG_KEY_AWS_PROFILE),
            region=plugin_config.get(CONFIG_KEY_AWS_REGION),
            endpoint_url=plugin_config.get(CONFIG_KEY_SIGNER_ENDPOINT) or None,
        )

    def user_agent_extra(self) -> str:
        return f"aws-signer-caller/NotationPlugin/{get_version()}"


class BotoSignerClient:
    """Adapts a boto3 ``signer`` client to the :class:`SignerClient` protocol.

    botocore exceptions propagate unchanged; callers map them with
    :func:`notation_awssigner.errors.map_client_error`.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def sign_payload(
        self,
        profile_name: str,
        account_id: str,
        payload: bytes,
        payload_format: str,
    ) -> SignPayloadResult:
        output = self._client.sign_payload(
            profileName=profile_name,
            profileOwner=account_id,
            payload=payload,
            payloadFormat=payload_format,
        )
        return SignPayloadResult(
            signature=output.get("signature", b""),
            metadata=output.get("metadata"),
        )

    def get_revocation_status(
        self,
        certificate_hashes: list[str],
        job_arn: str,
        platform_id: str,
        profile_version_arn: str,
        signature_timestamp: datetime,
    ) -> list[str]:
        output = self._client.get_revocation_status(
            signatureTimestamp=signature_timestamp,
            platformId=platform_id,
            profileVersionArn=profile_version_arn,
            jobArn=job_arn,
            certificateHashes=certificate_hashes,
        )
        return list(output.get("revokedEntities") or [])


def new_signer_client(config: SignerClientConfig) -> BotoSignerClient:
    """Create an AWS Signer client using the default credential chain.

    Raises:
        GenericError: If the session or client cannot be created.
    """
    logger.debug("Initializing Signer Client")
    if config.endpoint_url:
        logger.debug("AWS Signer endpoint override: %s", config.endpoint_url)
    if config.region:
        logger.debug("AWS Signer region override: %s", config.region)
    if config.profile:
        logger.debug("AWS Signer credential profile: %s", config.profile)

    try:
        session = boto3.Session(
            profile_name=config.profile,
            region_name=config.region,
        )
        client = session.client(
            SIGNER_SERVICE_NAME,
            endpoint_url=config.endpoint_url,
            config=Config(
                user_agent_extra=config.user_agent_extra(),
                connect_timeout=config.connect_timeout,
                read_timeout=config.read_timeout,
            ),
        )
    except BotoCoreError as exc:
        raise GenericError(str(exc)) from exc

    logger.debug("Initialized Signer Client")
    return BotoSignerClient(client)
