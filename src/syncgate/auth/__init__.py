"""Authorization and access assignment."""

from syncgate.auth.access import (
    AccessAssignmentResult,
    ChannelAccessAssignment,
    RoleAccessAssignment,
    assign_user_access,
    get_all_doc_channels,
)
from syncgate.auth.authorization import Authorization, authorize, get_required_authorizations

__all__ = [
    "AccessAssignmentResult",
    "Authorization",
    "ChannelAccessAssignment",
    "RoleAccessAssignment",
    "assign_user_access",
    "authorize",
    "get_all_doc_channels",
    "get_required_authorizations",
]
