"""Invitation mailer backed by Supabase Auth emails."""

from dataclasses import dataclass

from protrack.adapter.error import ProviderError
from protrack.domain.service.delivery_service import InvitationMailer
from protrack.domain.value import DeliveryChannel, Email

from .client import SupabaseAdminClient


class SupabaseInvitationMailer(InvitationMailer):
    """Sends invitations through the provider's own emails.

    New addresses get the provider's invite email; existing identities get
    a sign-in link that lands on the join page.
    """

    def __init__(self, client: SupabaseAdminClient) -> None:
        self.client = client

    async def send_account_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        await self.client.invite_user(email.root, redirect_url, metadata)

    async def send_join_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        await self.client.send_magic_link(email.root, redirect_url, metadata)


@dataclass(frozen=True)
class SentInvitation:
    """One message recorded by the mock mailer."""

    channel: DeliveryChannel
    email: Email
    redirect_url: str
    metadata: dict[str, str]


class MockInvitationMailer(InvitationMailer):
    """Records messages instead of sending them.

    Set ``fail`` to make every send raise ProviderError.
    """

    def __init__(self) -> None:
        self.sent: list[SentInvitation] = []
        self.fail = False

    def _record(
        self,
        channel: DeliveryChannel,
        email: Email,
        redirect_url: str,
        metadata: dict[str, str],
    ) -> None:
        if self.fail:
            raise ProviderError("Mock mailer failure")
        self.sent.append(SentInvitation(channel, email, redirect_url, dict(metadata)))

    async def send_account_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        self._record(DeliveryChannel.NEW_ACCOUNT, email, redirect_url, metadata)

    async def send_join_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        self._record(DeliveryChannel.EXISTING_ACCOUNT, email, redirect_url, metadata)
