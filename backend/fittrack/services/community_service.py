"""Community store: metadata, membership roster and join codes."""

import logging
import secrets
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.errors import Conflict, Forbidden, NotFound, ValidationError
from fittrack.models import Community, CommunityMember, CommunityMessage
from fittrack.models.community import JOIN_CODE_ALPHABET, JOIN_CODE_LENGTH
from fittrack.services.auth_service import AuthService
from fittrack.timeutils import utcnow


logger = logging.getLogger(__name__)


class CommunityService:
    """Service for community lifecycle and membership."""

    def __init__(self, db: Session):
        self.db = db
        self.auth_service = AuthService(db)
        self.max_code_attempts = get_settings().join_code_max_attempts

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_code(code: Optional[str]) -> str:
        return (code or "").strip().upper()

    def generate_join_code(self) -> str:
        """
        Draw codes until one is not held by any community.

        Collision avoidance only; the unique constraint on ``join_code`` is
        what actually guards against two creations drawing the same code.
        """
        while True:
            code = "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))
            taken = self.db.query(Community.id).filter(Community.join_code == code).first()
            if not taken:
                return code

    def get_community(self, community_id: int) -> Community:
        community = self.db.query(Community).filter(Community.id == community_id).first()
        if not community:
            raise NotFound("Community not found")
        return community

    @staticmethod
    def format_for_viewer(community: Community, viewer_id: int) -> Dict[str, Any]:
        """Community view relative to ``viewer_id``; the join code is shown to the owner only."""
        is_owner = community.owner_id == viewer_id
        members = community.members or []
        return {
            "id": community.id,
            "name": community.name,
            "is_public": community.is_public,
            "owner_id": community.owner_id,
            "owner_name": community.owner_name,
            "member_count": len(members),
            "is_owner": is_owner,
            "is_member": any(m.user_id == viewer_id for m in members),
            "join_code": community.join_code if (not community.is_public and is_owner) else None,
            "members": [
                {"user_id": m.user_id, "user_name": m.user_name, "joined_at": m.joined_at}
                for m in members
            ],
            "created_at": community.created_at,
            "updated_at": community.updated_at,
        }

    def _add_member(self, community: Community, user_id: int) -> Community:
        if community.is_member(user_id):
            return community

        entry = CommunityMember(user_id=user_id, user_name=self.auth_service.display_name(user_id))
        try:
            with self.db.begin_nested():
                community.members.append(entry)
                community.updated_at = utcnow()
        except IntegrityError:
            # A concurrent join inserted the same roster row
            logger.info("User %s already joined community %s", user_id, community.id)
        self.db.commit()
        self.db.refresh(community)
        return community

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_community(self, owner_id: int, name: str, is_public: bool = True) -> Community:
        """Create a community with its owner as the sole member."""
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValidationError("Community name is required", field="name")

        is_public = bool(is_public)
        owner_name = self.auth_service.display_name(owner_id)

        for attempt in range(1, self.max_code_attempts + 1):
            community = Community(
                name=name,
                is_public=is_public,
                owner_id=owner_id,
                owner_name=owner_name,
                join_code=None if is_public else self.generate_join_code(),
            )
            community.members.append(CommunityMember(user_id=owner_id, user_name=owner_name))
            try:
                with self.db.begin_nested():
                    self.db.add(community)
            except IntegrityError:
                if is_public:
                    raise
                logger.warning("Join code collision creating community (attempt %s), redrawing", attempt)
                continue

            self.db.commit()
            self.db.refresh(community)
            logger.info("User %s created %s community %s", owner_id, "public" if is_public else "private", community.id)
            return community

        raise Conflict("Could not allocate a unique join code, please retry")

    def list_public(self, viewer_id: int) -> List[Dict[str, Any]]:
        """All public communities, newest first."""
        communities = (
            self.db.query(Community)
            .filter(Community.is_public.is_(True))
            .order_by(Community.created_at.desc(), Community.id.desc())
            .all()
        )
        return [self.format_for_viewer(c, viewer_id) for c in communities]

    def list_mine(self, user_id: int) -> List[Dict[str, Any]]:
        """Communities the user owns or belongs to, most recently updated first."""
        communities = (
            self.db.query(Community)
            .filter(
                or_(
                    Community.owner_id == user_id,
                    Community.members.any(CommunityMember.user_id == user_id),
                )
            )
            .order_by(Community.updated_at.desc(), Community.id.desc())
            .all()
        )
        return [self.format_for_viewer(c, user_id) for c in communities]

    def join_public(self, user_id: int, community_id: int) -> Community:
        community = self.get_community(community_id)
        if not community.is_public:
            raise Forbidden("This community requires a join code")
        return self._add_member(community, user_id)

    def join_with_code(self, user_id: int, code: str) -> Community:
        code = self.normalize_code(code)
        if not code:
            raise ValidationError("Join code is required", field="join_code")

        community = self.db.query(Community).filter(Community.join_code == code).first()
        if not community:
            raise NotFound("Invalid join code")
        return self._add_member(community, user_id)

    def leave(self, user_id: int, community_id: int) -> None:
        """Remove the user from the roster. Leaving twice is fine; the owner cannot leave."""
        community = self.get_community(community_id)
        if community.owner_id == user_id:
            raise Forbidden("Owner must transfer ownership or delete community")

        entry = community.member(user_id)
        if entry is None:
            return

        community.members.remove(entry)
        community.updated_at = utcnow()
        self.db.commit()
        logger.info("User %s left community %s", user_id, community_id)

    def delete(self, owner_id: int, community_id: int) -> None:
        """Delete a community with its roster and messages in one transaction."""
        community = self.get_community(community_id)
        if community.owner_id != owner_id:
            raise Forbidden("Only owner can delete")

        removed = (
            self.db.query(CommunityMessage)
            .filter(CommunityMessage.community_id == community.id)
            .delete()
        )
        self.db.delete(community)
        self.db.commit()
        logger.info("Deleted community %s and %s messages", community_id, removed)

    def transfer_ownership(self, current_owner_id: int, community_id: int, new_owner_id: int) -> Community:
        community = self.get_community(community_id)
        if community.owner_id != current_owner_id:
            raise Forbidden("Only owner can transfer ownership")

        new_owner = community.member(new_owner_id)
        if new_owner is None:
            raise ValidationError("New owner must be a member", field="new_owner_id")

        community.owner_id = new_owner.user_id
        community.owner_name = new_owner.user_name
        self.db.commit()
        self.db.refresh(community)
        logger.info("Community %s ownership moved from %s to %s", community_id, current_owner_id, new_owner_id)
        return community
