"""Supabase Auth adapter."""

from .client import SupabaseAdminClient
from .identity import MockIdentityProvider, SupabaseIdentityProvider
from .mailer import MockInvitationMailer, SupabaseInvitationMailer

__all__ = [
    "MockIdentityProvider",
    "MockInvitationMailer",
    "SupabaseAdminClient",
    "SupabaseIdentityProvider",
    "SupabaseInvitationMailer",
]
