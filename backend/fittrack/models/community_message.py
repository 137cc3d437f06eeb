"""Community message model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from fittrack.database import Base
from fittrack.timeutils import utcnow


class CommunityMessage(Base):
    """A chat message in a community. Append-only."""

    __tablename__ = "community_messages"

    id = Column(Integer, primary_key=True, index=True)
    community_id = Column(
        Integer, ForeignKey("communities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    user_name = Column(String(255))  # Sender name snapshot at post time

    body = Column(Text, nullable=False)

    created_at = Column(DateTime, default=utcnow, index=True)

    # Relationships; deletion is driven by CommunityService.delete
    community = relationship("Community")

    def __repr__(self):
        preview = self.body[:50] + "..." if len(self.body) > 50 else self.body
        return f"<CommunityMessage {self.user_name}: {preview}>"


Index("ix_community_messages_community_created", CommunityMessage.community_id, CommunityMessage.created_at)
