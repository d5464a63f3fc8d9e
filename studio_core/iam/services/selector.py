# studio_core/iam/services/selector.py
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence
from uuid import UUID

from rest_framework.exceptions import PermissionDenied

from studio_core.common.store import MembershipRecord, StudioStore
from studio_core.iam.session import ActiveStudio, SessionContext

logger = logging.getLogger(__name__)


class StudioAccessDenied(PermissionDenied):
    default_detail = "You do not have access to the selected studio."
    default_code = "permission_denied"


class TenantSelector:
    """
    Lists the studios an identity belongs to and commits one of them to a
    SessionContext. The role always comes from the chosen membership.
    """

    def __init__(self, store: StudioStore):
        self.store = store

    async def available(self, identity_id: Any) -> List[MembershipRecord]:
        return list(await self.store.list_tenants_for_identity(identity_id))

    async def select(
        self,
        context: SessionContext,
        tenant_id: UUID,
        *,
        memberships: Optional[Sequence[MembershipRecord]] = None,
    ) -> ActiveStudio:
        if memberships is None:
            memberships = await self.available(context.identity_id)

        wanted = str(tenant_id)
        for m in memberships:
            if str(m.tenant_id) == wanted:
                return context.activate(m)

        logger.info("identity %s rejected for studio %s", context.identity_id, wanted)
        raise StudioAccessDenied()

    @staticmethod
    def choose_default(memberships: Sequence[MembershipRecord]) -> Optional[MembershipRecord]:
        return memberships[0] if memberships else None
