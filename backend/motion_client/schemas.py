from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProjectStatus = Literal["pending", "processing", "completed", "failed"]

# the project query keeps polling while the last-known status is one of these
ACTIVE_STATUSES = frozenset({"pending", "processing"})


class Project(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    original_video_url: str = Field(alias="originalVideoUrl")
    identity_frame_url: Optional[str] = Field(alias="identityFrameUrl")
    generated_video_url: Optional[str] = Field(alias="generatedVideoUrl")
    status: ProjectStatus
    created_at: datetime = Field(alias="createdAt")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class ErrorMessage(BaseModel):
    message: str
