"""
Amazon Resource Names

Parsing of ARNs of the form
``arn:partition:service:region:account-id:resource``. The resource section
may itself contain ``:`` characters.
"""

from dataclasses import dataclass

ARN_PREFIX = "arn:"
_ARN_DELIMITER = ":"
_ARN_SECTIONS = 6

SIGNER_SERVICE = "signer"
SIGNING_PROFILES_PREFIX = "/signing-profiles/"


class ArnError(ValueError):
    """Raised when a string is not a well-formed ARN."""


@dataclass(frozen=True)
class Arn:
    """A parsed Amazon Resource Name."""

    partition: str
    service: str
    region: str
    account_id: str
    resource: str

    def resource_segments(self) -> list[str]:
        """Split the resource on ``/``. A leading ``/`` yields an empty first segment."""
        return self.resource.split("/")

    def __str__(self) -> str:
        return _ARN_DELIMITER.join(
            ["arn", self.partition, self.service, self.region, self.account_id, self.resource]
        )


def parse_arn(value: str) -> Arn:
    """Parse an ARN string.

    Raises:
        ArnError: If the prefix is wrong or there are too few sections.
    """
    if not value.startswith(ARN_PREFIX):
        raise ArnError("arn: invalid prefix")
    sections = value.split(_ARN_DELIMITER, _ARN_SECTIONS - 1)
    if len(sections) != _ARN_SECTIONS:
        raise ArnError("arn: not enough sections")
    return Arn(
        partition=sections[1],
        service=sections[2],
        region=sections[3],
        account_id=sections[4],
        resource=sections[5],
    )


def as_signing_profile_arn(value: str) -> Arn | None:
    """Return the parsed ARN if ``value`` names an AWS Signer signing profile resource."""
    try:
        parsed = parse_arn(value)
    except ArnError:
        return None
    if parsed.service == SIGNER_SERVICE and parsed.resource.startswith(SIGNING_PROFILES_PREFIX):
        return parsed
    return None
