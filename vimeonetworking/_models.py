import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp as returned by the API.

    A trailing ``Z`` is accepted and naive timestamps are taken to be UTC. Anything
    that is not a parseable string yields None.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _to_wire(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class BaseModel:
    """
    Base model class for Vimeo API models.

    This class provides common functionality for all models,
    including methods to convert the model to a dictionary or JSON string.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the model instance to a dictionary.

        Returns:
        -------
        Dict[str, Any]:
            A dictionary representation of the model, excluding None values. Timestamps
            are written in ISO 8601.
        """
        return {k: _to_wire(v) for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        """
        Convert the model instance to a JSON string.

        Returns:
        -------
        str:
            A JSON string representation of the model, excluding None values.
        """
        return json.dumps(self.to_dict())
