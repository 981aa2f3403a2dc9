"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, Index, String, Text

from notification_center.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False)
    type = Column(String(32), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False, default="")
    item_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(), nullable=False)
    expires_at = Column(DateTime(), nullable=False, index=True)
    delivered_at = Column(DateTime(), nullable=True)
    read_at = Column(DateTime(), nullable=True)

    __table_args__ = (
        Index("ix_notification_user_created", "user_id", created_at.desc()),
        Index("ix_notification_user_read", "user_id", "read_at"),
    )


__all__ = ["NotificationModel"]
