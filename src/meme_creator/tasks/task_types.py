"""Task message and delivery outcome types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class DeliveryStatus(Enum):
    """Outcome of delivering one job to its handler."""
    COMPLETED = "completed"
    RETRYING = "retrying"
    DROPPED = "dropped"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RenderJob:
    """Request to render the meme with the given id."""
    meme_id: str

    def to_payload(self) -> Dict[str, Any]:
        """Serializable form carried by a queue."""
        return {"meme_id": self.meme_id}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RenderJob":
        """Rebuild a job from its queued form.

        Raises:
            ValueError: If the payload is not an object or has no usable meme id
        """
        if not isinstance(payload, dict):
            raise ValueError("render job payload must be an object")
        meme_id = payload.get("meme_id")
        if not isinstance(meme_id, str) or not meme_id:
            raise ValueError("render job payload needs a meme_id")
        return cls(meme_id=meme_id)


@dataclass
class TaskResult:
    """Result of delivering a job."""
    job: RenderJob
    status: DeliveryStatus
    attempts: int = 1
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """Check if the handler completed."""
        return self.status == DeliveryStatus.COMPLETED


JobHandler = Callable[[RenderJob], None]
