import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from vimeonetworking._models import BaseModel, optional_str, parse_datetime


class LiveStreamingStatus(str, Enum):
    """
    The streaming status of a live video.

    - UNAVAILABLE: The RTMP link is visible but not yet able to receive the stream.
    - PENDING: Vimeo is working on setting up the connection.
    - READY: The RTMP URL is ready to receive video content.
    - STREAMING_PREVIEW: The stream is in a "preview" state. It will be accessible to the
      public when you transition to "streaming".
    - STREAMING: The stream is open and receiving content.
    - STREAMING_ERROR: The stream has failed due to an error relating to the broadcaster,
      for example the monthly broadcast limit was reached.
    - DONE: The stream has been ended intentionally by the end-user.
    """

    UNAVAILABLE = "unavailable"
    PENDING = "pending"
    READY = "ready"
    STREAMING_PREVIEW = "streaming_preview"
    STREAMING = "streaming"
    STREAMING_ERROR = "streaming_error"
    DONE = "done"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> Optional["LiveStreamingStatus"]:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class LiveModel(BaseModel):
    """
    The ``live`` object of a video response.

    Every field is optional: values that are missing or of the wrong type are left as
    None rather than failing the whole mapping.

    Attributes
    ----------
    link : Optional[str]
        The RTMP link used to host the live stream.
    key : Optional[str]
        The stream key.
    active_time : Optional[datetime]
        When the stream became active.
    ended_time : Optional[datetime]
        When the stream ended.
    archived_time : Optional[datetime]
        When the live video was archived.
    scheduled_start_time : Optional[datetime]
        When the live video is scheduled to go online.
    status : Optional[str]
        The raw status string. Prefer `live_streaming_status` for checking the status.
    """

    link: Optional[str] = None
    key: Optional[str] = None
    active_time: Optional[datetime] = None
    ended_time: Optional[datetime] = None
    archived_time: Optional[datetime] = None
    scheduled_start_time: Optional[datetime] = None
    status: Optional[str] = None

    @property
    def live_streaming_status(self) -> Optional[LiveStreamingStatus]:
        """The status as a `LiveStreamingStatus`, None when absent or unknown."""
        return LiveStreamingStatus.from_wire(self.status)

    @classmethod
    def from_dict(cls, data: Any) -> "LiveModel":
        """
        Map a decoded ``live`` JSON object. Anything other than a mapping gives an empty model.
        """
        if not isinstance(data, Mapping):
            return cls()

        return cls(
            link=optional_str(data.get("link")),
            key=optional_str(data.get("key")),
            active_time=parse_datetime(data.get("active_time")),
            ended_time=parse_datetime(data.get("ended_time")),
            archived_time=parse_datetime(data.get("archived_time")),
            scheduled_start_time=parse_datetime(data.get("scheduled_start_time")),
            status=optional_str(data.get("status")),
        )

    @classmethod
    def from_json(cls, payload: str) -> "LiveModel":
        try:
            data = json.loads(payload)
        except (TypeError, ValueError):
            return cls()
        return cls.from_dict(data)
