"""Invitation delivery domain service."""

from urllib.parse import urlencode

import logfire

from protrack.config import InvitationSettings
from protrack.domain.model.invitation import Invitation
from protrack.domain.value import DeliveryChannel, Email

from .base import Service


class InvitationMailer:
    """Outbound invitation email interface.

    Implementations raise the adapter layer's ProviderError on failure.
    """

    async def send_account_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        """Invite an email that has no identity yet.

        Args:
            email: Recipient
            redirect_url: Link target once the recipient follows the email
            metadata: Data attached to the invitation
        """
        raise NotImplementedError

    async def send_join_invitation(
        self, email: Email, redirect_url: str, metadata: dict[str, str]
    ) -> None:
        """Invite an email that already has an identity to join a tenant.

        Args:
            email: Recipient
            redirect_url: Link target once the recipient follows the email
            metadata: Data attached to the invitation
        """
        raise NotImplementedError


class InvitationDeliveryService(Service):
    """Chooses the delivery channel and builds invitation links."""

    def __init__(
        self,
        mailer: InvitationMailer,
        invitation_settings: InvitationSettings,
        frontend_url: str,
    ) -> None:
        """Initialize delivery service.

        Args:
            mailer: Invitation mailer implementation
            invitation_settings: Invitation configuration (link paths)
            frontend_url: Base URL of the web frontend
        """
        self.mailer = mailer
        self.invitation_settings = invitation_settings
        self.frontend_url = frontend_url.rstrip("/")

    def channel_for(self, has_identity: bool) -> DeliveryChannel:
        """Pick the channel for an invitee."""
        if has_identity:
            return DeliveryChannel.EXISTING_ACCOUNT
        return DeliveryChannel.NEW_ACCOUNT

    def link_for(self, invitation: Invitation, channel: DeliveryChannel) -> str:
        """Build the link an invitee follows.

        New accounts land on the accept page (set password). Existing
        identities land on the join page (sign in, then join).
        """
        if channel == DeliveryChannel.EXISTING_ACCOUNT:
            path = self.invitation_settings.join_path
        else:
            path = self.invitation_settings.accept_path
        query = urlencode({"token": invitation.invitation_token.root})
        return f"{self.frontend_url}{path}?{query}"

    async def deliver(
        self,
        invitation: Invitation,
        tenant_name: str,
        has_identity: bool,
    ) -> DeliveryChannel:
        """Send the invitation email over the channel matching the invitee.

        Args:
            invitation: Invitation to deliver
            tenant_name: Organization name shown in the email
            has_identity: Whether the invitee already has an identity

        Returns:
            The channel used

        Raises:
            ProviderError: If the mailer fails
        """
        channel = self.channel_for(has_identity)
        redirect_url = self.link_for(invitation, channel)
        metadata = {
            "invitation_token": invitation.invitation_token.root,
            "tenant_id": str(invitation.tenant_id),
            "tenant_name": tenant_name,
        }

        with logfire.span(
            "delivery_service.deliver",
            invitation_id=str(invitation.id),
            channel=channel.value,
        ):
            if channel == DeliveryChannel.EXISTING_ACCOUNT:
                await self.mailer.send_join_invitation(
                    invitation.email, redirect_url, metadata
                )
            else:
                await self.mailer.send_account_invitation(
                    invitation.email, redirect_url, metadata
                )
            logfire.info(
                "Invitation email dispatched",
                invitation_id=str(invitation.id),
                channel=channel.value,
            )
            return channel
