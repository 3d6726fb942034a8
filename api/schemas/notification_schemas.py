from datetime import datetime
from typing import Literal

from api.schemas.base import CamelModel

NotificationType = Literal["success", "error", "info"]


class Notification(CamelModel):
    id: str
    message: str
    type: NotificationType
    created_at: datetime
