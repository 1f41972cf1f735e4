"""
Error taxonomy for the AI stages
"""


class CampaignGenieError(Exception):
    """Base class for errors raised by the AI client adapter."""
    pass


class AuthError(CampaignGenieError):
    """The API key is missing, invalid or not authorized for the model."""
    pass


class MalformedResponse(CampaignGenieError):
    """The copy model returned something that does not fit the campaign schema."""
    def __init__(self, message: str, raw_output: str = ""):
        self.raw_output = raw_output
        super().__init__(message)


class NoImageProduced(CampaignGenieError):
    """The image model answered without any inline image part."""
    pass


class ConnectivityError(CampaignGenieError):
    """The backend could not be reached or did not answer in time."""
    pass


AUTH_ERROR_MARKERS = (
    "not found",
    "api key not valid",
    "api_key_invalid",
    "permission_denied",
    "unauthenticated",
)


def is_auth_error(error: Exception) -> bool:
    """
    Classify a backend error as a credential problem.

    Checks the HTTP status carried by google-genai / httpx style errors first,
    then falls back to the error text.
    """
    if isinstance(error, AuthError):
        return True

    code = getattr(error, "code", None) or getattr(error, "status_code", None)
    if isinstance(code, int) and code in (401, 403):
        return True

    message = str(error).lower()
    return any(marker in message for marker in AUTH_ERROR_MARKERS)
