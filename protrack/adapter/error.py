"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class IdentityExistsError(ProviderError):
    """The provider already has an identity for this email."""

    pass
