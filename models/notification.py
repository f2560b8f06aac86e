from datetime import datetime

from pydantic import BaseModel, Field

from enums.notification_level import NotificationLevel


class NotificationDTO(BaseModel):
    """A toast message for the UI layer."""
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    created_at: datetime = Field(default_factory=datetime.utcnow)
