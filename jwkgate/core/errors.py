"""Error taxonomy for bearer token verification."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned to HTTP clients."""

    code: str
    message: str


class AuthError(Exception):
    """Base class for every verification failure."""

    code = "auth_error"
    default_message = "Authentication failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to a client-facing error body."""
        return ErrorResponse(code=self.code, message=self.message)


class AuthorizationHeaderError(AuthError):
    """Authorization header is missing or not a Bearer credential."""

    code = "invalid_authorization_header"
    default_message = "Invalid authorization header"


class MalformedTokenError(AuthError):
    """Token is not three base64url JSON segments or lacks expected claims."""

    code = "malformed_token"
    default_message = "Token is malformed"


class MissingExpiryError(AuthError):
    code = "missing_expiry"
    default_message = "Token expiry is undefined"


class ExpiredTokenError(AuthError):
    code = "expired_token"
    default_message = "Expired token"


class MissingKidError(AuthError):
    code = "missing_kid"
    default_message = "Token kid is undefined"


class InvalidSignatureError(AuthError):
    code = "invalid_signature"
    default_message = "Invalid token signature"


class MissingUserIdError(AuthError):
    code = "missing_user_id"
    default_message = "Token payload user_id is undefined"


class KeyResolutionError(AuthError):
    """Failures resolving a verification key from the key set."""

    code = "key_resolution_error"
    default_message = "Unable to resolve verification key"


class UnknownKeyError(KeyResolutionError):
    code = "unknown_kid"
    default_message = "Invalid token kid"


class MalformedJWKSError(KeyResolutionError):
    code = "malformed_jwks"
    default_message = "Malformed JWKS returned from identity provider"


class JWKSFetchError(KeyResolutionError):
    code = "jwks_fetch_failed"
    default_message = "Unable to fetch JWKS from identity provider"
