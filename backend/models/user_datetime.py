# Role: Snapshot of the requester's local clock (date/time, timezone, ISO + epoch timestamps).
# Clients capture it at send time; the backend only uses it to enrich the system instruction.

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class UserDateTime(BaseModel):
    # Key line: wire names are camelCase (browser clients), Python attributes are snake_case.
    model_config = ConfigDict(populate_by_name=True)

    # Every field is optional: a partial snapshot still helps the model.
    local_date_time: Optional[str] = Field(default=None, alias="localDateTime")
    timezone: Optional[str] = None
    timestamp: Optional[str] = None
    unix_timestamp: Optional[Union[int, float, str]] = Field(default=None, alias="unixTimestamp")

    @classmethod
    def now(cls, moment: Optional[datetime] = None) -> "UserDateTime":
        # Role: what a client sends, e.g. "Saturday, October 17, 2026 at 9:15:02 PM EDT".
        local = (moment or datetime.now()).astimezone()
        tz_name = local.tzname() or "UTC"
        hour = local.strftime("%I").lstrip("0") or "12"
        return cls(
            local_date_time=(
                f"{local:%A, %B} {local.day}, {local:%Y} at "
                f"{hour}:{local:%M:%S %p} {tz_name}"
            ),
            timezone=tz_name,
            timestamp=local.isoformat(),
            unix_timestamp=int(local.timestamp()),
        )

    @classmethod
    def from_untrusted(cls, raw: Any) -> Optional["UserDateTime"]:
        """Parse a client-supplied snapshot; unusable input yields None instead of an error."""
        if raw is None:
            return None
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, dict):
            logger.debug("Ignoring user_datetime of type %s", type(raw).__name__)
            return None
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            logger.debug("Ignoring malformed user_datetime: %s", e)
            return None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
