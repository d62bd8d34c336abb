"""Mock identity providers for testing."""

from dishka import Scope, provide

from protrack.adapter.supabase import MockIdentityProvider, MockInvitationMailer
from protrack.domain.service import IdentityProvider, InvitationMailer
from protrack.util.di.infrastructure.identity import IdentityComponentProvider


class MockIdentityComponentProvider(IdentityComponentProvider):
    """Mock identity component using in-memory identities and a recording mailer.

    The mocks are APP-scoped so a test can seed identities and inspect sent
    mail through the same instances the use cases see.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_identity_provider(self) -> MockIdentityProvider:
        """Provide the in-memory identity provider."""
        return MockIdentityProvider()

    @provide(scope=Scope.APP)
    def get_identity_provider(self, mock: MockIdentityProvider) -> IdentityProvider:
        """Expose the mock as the identity provider."""
        return mock

    @provide(scope=Scope.APP)
    def get_mock_invitation_mailer(self) -> MockInvitationMailer:
        """Provide the recording mailer."""
        return MockInvitationMailer()

    @provide(scope=Scope.APP)
    def get_invitation_mailer(self, mock: MockInvitationMailer) -> InvitationMailer:
        """Expose the mock as the invitation mailer."""
        return mock
