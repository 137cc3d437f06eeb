"""Community and membership roster models."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from fittrack.database import Base
from fittrack.timeutils import utcnow

JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
JOIN_CODE_LENGTH = 6


class Community(Base):
    """A group of users sharing a message log."""

    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    is_public = Column(Boolean, default=True, nullable=False, index=True)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    owner_name = Column(String(255))  # Snapshot at write time

    # Only private communities hold a code; NULLs do not collide
    join_code = Column(String(JOIN_CODE_LENGTH), unique=True, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    members = relationship(
        "CommunityMember",
        back_populates="community",
        order_by="CommunityMember.joined_at",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Community {self.id}: {self.name}>"

    @property
    def member_count(self):
        return len(self.members) if self.members else 0

    def member(self, user_id):
        """Roster entry for ``user_id``, or None."""
        for m in self.members:
            if m.user_id == user_id:
                return m
        return None

    def is_member(self, user_id):
        return self.member(user_id) is not None


class CommunityMember(Base):
    """Roster entry; at most one per (community, user)."""

    __tablename__ = "community_members"
    __table_args__ = (
        UniqueConstraint("community_id", "user_id", name="uq_community_members_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    community_id = Column(
        Integer, ForeignKey("communities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user_name = Column(String(255))  # Snapshot at join time
    joined_at = Column(DateTime, default=utcnow)

    community = relationship("Community", back_populates="members")

    def __repr__(self):
        return f"<CommunityMember {self.user_id} in {self.community_id}>"
