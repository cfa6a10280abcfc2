"""
Error types raised by the Roblox OAuth integration.

Every failure surfaces as a subclass of RobloxAuthError so the host application
can catch one type. Transport failures are wrapped in the error of the operation
that hit them (a failed discovery fetch is a DiscoveryError, never a raw httpx error).
"""


class RobloxAuthError(Exception):
    """Base class for all integration errors."""


class ConfigurationError(RobloxAuthError):
    """Required provider settings are missing or invalid."""


class DiscoveryError(RobloxAuthError):
    """The OpenID discovery document could not be fetched or is incomplete."""


class TokenExchangeError(RobloxAuthError):
    """The authorization code could not be exchanged for tokens."""


class InvalidCallbackError(RobloxAuthError):
    """The callback request is missing its code or carries a bad state value."""


class MalformedTokenError(RobloxAuthError):
    """The ID token is not a three-segment token with a JSON payload."""


class MissingClaimError(RobloxAuthError):
    """A required claim is absent from the ID token."""


class NotAuthenticatedError(RobloxAuthError):
    """No token set is stored in the session."""


class GroupFetchError(RobloxAuthError):
    """The group membership API call failed or returned an unusable body."""


class InvalidArgumentError(RobloxAuthError):
    """An argument has the wrong type."""
