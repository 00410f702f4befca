"""Source status and metadata types."""

from enum import Enum

from pydantic import BaseModel, Field


class SourceStatus(str, Enum):
    """Production state of a completion source."""

    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class SourceMetadata(BaseModel):
    """Static description a source reports to the engine."""

    priority: int = Field(default=0, description="Higher priority sources are merged first")
    menu: str | None = Field(default=None, description="Default menu text for the source's candidates")
    dup: bool = Field(default=False, description="Keep candidates whose word another source already produced")

    class Config:
        """Pydantic configuration."""

        frozen = True
