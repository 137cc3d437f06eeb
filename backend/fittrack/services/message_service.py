"""Community message log, gated by current membership."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from fittrack.errors import Forbidden, NotFound, ValidationError
from fittrack.models import Community, CommunityMessage
from fittrack.services.auth_service import AuthService
from fittrack.services.common import clamp_limit


logger = logging.getLogger(__name__)

ORDERS = {
    "asc": "asc",
    "ascending": "asc",
    "desc": "desc",
    "descending": "desc",
}


class MessageService:
    """Append-only messages per community, readable by members only."""

    LIST_DEFAULT_LIMIT = 50

    def __init__(self, db: Session):
        self.db = db
        self.auth_service = AuthService(db)

    def _community_for_member(self, user_id: int, community_id: int, action: str) -> Community:
        """Membership is read on every call, never cached on the message."""
        community = self.db.query(Community).filter(Community.id == community_id).first()
        if not community:
            raise NotFound("Community not found")
        if not community.is_member(user_id):
            raise Forbidden(f"You must join the community to {action} messages")
        return community

    def post_message(self, user_id: int, community_id: int, body: str) -> CommunityMessage:
        text = str(body).strip() if body is not None else ""
        if not text:
            raise ValidationError("Message cannot be empty", field="message")

        community = self._community_for_member(user_id, community_id, "send")

        message = CommunityMessage(
            community_id=community.id,
            user_id=user_id,
            user_name=self.auth_service.display_name(user_id),
            body=text,
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)

        logger.info("User %s posted message %s in community %s", user_id, message.id, community_id)
        return message

    def list_messages(
        self,
        user_id: int,
        community_id: int,
        limit: Optional[int] = LIST_DEFAULT_LIMIT,
        order: str = "asc",
    ) -> List[CommunityMessage]:
        """
        The ``limit`` most recent messages.

        ``asc`` returns them oldest-first (chat view), ``desc`` newest-first.
        Either way the window is the latest messages, never the oldest ones.
        """
        direction = ORDERS.get(str(order or "asc").strip().lower())
        if direction is None:
            raise ValidationError("order must be 'asc' or 'desc'", field="order")
        limit = clamp_limit(limit, self.LIST_DEFAULT_LIMIT)

        community = self._community_for_member(user_id, community_id, "read")

        recent = (
            self.db.query(CommunityMessage)
            .filter(CommunityMessage.community_id == community.id)
            .order_by(CommunityMessage.created_at.desc(), CommunityMessage.id.desc())
            .limit(limit)
            .all()
        )
        if direction == "asc":
            recent.reverse()
        return recent
