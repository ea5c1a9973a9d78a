"""Domain error taxonomy

Every error carries the HTTP status the API layer answers with, so routes never
need to translate them one by one.
"""


class DomainError(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def is_operational(self) -> bool:
        """Client-caused errors are 'fail', server-side ones are 'error'."""
        return self.status_code < 500


class ValidationFailure(DomainError):
    status_code = 400


class TokenInvalid(DomainError):
    status_code = 400


class TokenExpired(DomainError):
    status_code = 400


class UniquenessViolation(DomainError):
    status_code = 409


class AggregationFailure(DomainError):
    status_code = 500


class NotFound(DomainError):
    status_code = 404


class AuthenticationFailure(DomainError):
    status_code = 401


class PermissionDenied(DomainError):
    status_code = 403
