"""
AWS Signer error mapping

Translates exceptions raised by the AWS Signer client into the plugin's
closed error taxonomy. The mapping is total: every exception yields exactly
one PluginError.
"""

from botocore.exceptions import ClientError

from notation_awssigner.exceptions import (
    AccessDeniedError,
    GenericError,
    PluginError,
    ThrottledError,
    ValidationError,
)

VALIDATION_ERROR_CODES = frozenset(
    {
        "NotFoundException",
        "ResourceNotFoundException",
        "ValidationException",
        "BadRequestException",
    }
)
THROTTLING_ERROR_CODES = frozenset({"ThrottlingException"})
ACCESS_DENIED_ERROR_CODES = frozenset({"AccessDeniedException"})


def map_client_error(error: BaseException) -> PluginError:
    """Convert an AWS Signer call failure into a PluginError.

    API errors (``botocore.exceptions.ClientError``) are classified by error
    code and carry the service request id when one was returned. Anything
    else becomes a GenericError with the raw error text.
    """
    if isinstance(error, PluginError):
        return error
    if not isinstance(error, ClientError):
        return GenericError(str(error))

    details = error.response.get("Error", {})
    code = details.get("Code", "")
    message = f"Failed to call AWSSigner. Error: {details.get('Message', '')}."
    request_id = error.response.get("ResponseMetadata", {}).get("RequestId")
    if request_id:
        message += f" RequestID: {request_id}."

    if code in VALIDATION_ERROR_CODES:
        return ValidationError(message)
    if code in THROTTLING_ERROR_CODES:
        return ThrottledError(message)
    if code in ACCESS_DENIED_ERROR_CODES:
        return AccessDeniedError(message)
    return GenericError(message)
