"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class Unauthorized(DomainError):
    """Raised when a permission check fails."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class MissingTenantContext(DomainError):
    """Raised when a tenant-scoped store call is made without a tenant scope.

    This is a programming error, not a recoverable condition.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Tenant scope is required for {operation}")


class UpstreamUnavailable(DomainError):
    """Raised when the identity provider or a store fails transiently."""

    def __init__(self, upstream: str, detail: str | None = None):
        self.upstream = upstream
        message = f"{upstream} is unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AlreadyMember(DomainError):
    """Raised when the email already has a user record in the tenant."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A user with email {email} already exists in this organization")


class InvitationAlreadySent(DomainError):
    """Raised when the email already has a pending invitation in the tenant."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An invitation has already been sent to {email}")


class InvalidOrExpiredInvitation(DomainError):
    """Raised when no pending invitation exists for a token."""

    def __init__(self) -> None:
        super().__init__("Invitation not found or already used")


class InvitationExpired(DomainError):
    """Raised when a pending invitation is past its expiry time."""

    def __init__(self) -> None:
        super().__init__("Invitation has expired")


class InvitationAlreadyProcessed(DomainError):
    """Raised when another request consumed or cancelled the invitation first."""

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__(f"Invitation {invitation_id} has already been processed")


class SubdomainTaken(DomainError):
    """Raised when a tenant subdomain is already reserved."""

    def __init__(self, subdomain: str):
        self.subdomain = subdomain
        super().__init__(f"Subdomain '{subdomain}' is already taken")


class SubdomainInvalidFormat(DomainError):
    """Raised when a subdomain fails the format rules."""

    def __init__(self, subdomain: str):
        self.subdomain = subdomain
        super().__init__(
            "Subdomain must be 3-50 characters, alphanumeric and hyphens only"
        )
