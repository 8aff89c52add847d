from sqlalchemy import (
    Column, Integer, BigInteger, String, Text, ForeignKey,
    DateTime, Enum, Index
)
from db.database import Base
from datetime import datetime
import enum


class PrivacySetting(str, enum.Enum):
    PUBLIC = "public"
    SUBSCRIBER_ONLY = "subscriber_only"


class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    creator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(String(500), nullable=True)      # Example: "travel, drone, 4k"

    # Stored under UPLOAD_DIR/videos
    filename = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=True)

    privacy = Column(Enum(PrivacySetting), default=PrivacySetting.PUBLIC, nullable=False)

    # Derived from video_likes on every toggle
    like_count = Column(Integer, default=0, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)

    upload_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_videos_creator", "creator_id"),
        Index("idx_videos_privacy", "privacy"),
        Index("idx_videos_upload_date", "upload_date"),
    )

    def __repr__(self):
        return f"<Video(id={self.id}, creator_id={self.creator_id}, privacy={self.privacy})>"
