from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum, Index, func
from db.database import Base
from datetime import datetime
import enum


class UserRole(str, enum.Enum):
    CREATOR = "creator"
    VIEWER = "viewer"


class Users(Base):
    __tablename__ = "users"

    # Primary Identity
    id = Column(Integer, primary_key=True, index=True)

    # Basic Info
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    profile_image = Column(String(255), nullable=True)

    # Authentication
    password_hash = Column(String(255), nullable=False)

    # Role Management
    role = Column(Enum(UserRole), default=UserRole.VIEWER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        # "Alice" and "alice" are the same account
        Index("uq_users_username_lower", func.lower(username), unique=True),
        Index("uq_users_email_lower", func.lower(email), unique=True),
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
