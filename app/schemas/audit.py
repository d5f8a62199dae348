import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

class AuditEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    actor_user_id: uuid.UUID
    actor_email: str
    org_id: uuid.UUID | None
    action: str
    metadata: dict[str, Any]
