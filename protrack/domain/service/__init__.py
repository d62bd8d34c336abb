"""Domain services."""

from .access_service import AccessService
from .base import Service
from .delivery_service import InvitationDeliveryService, InvitationMailer
from .identity_service import IdentityProvider, IdentityService
from .invitation_service import InvitationService
from .tenant_guard import TenantResolverGuard
from .tenant_service import TenantService
from .user_service import UserService

__all__ = [
    "AccessService",
    "IdentityProvider",
    "IdentityService",
    "InvitationDeliveryService",
    "InvitationMailer",
    "InvitationService",
    "Service",
    "TenantResolverGuard",
    "TenantService",
    "UserService",
]
