"""Document expiry."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from syncgate.core.types import resolve_old_doc
from syncgate.definitions.types import DocumentDefinition, resolve_constraint
from syncgate.errors import ConfigurationError
from syncgate.host import Host

logger = logging.getLogger(__name__)

# Numeric expiries up to this many seconds are offsets from now; larger ones are Unix timestamps
MAX_RELATIVE_EXPIRY_SECONDS = 30 * 24 * 60 * 60


def resolve_expiry_date(value: Any, now: datetime | None = None) -> datetime:
    """Convert an expiry value into an aware UTC datetime.

    Accepts seconds (relative or absolute), an ISO 8601 string or a
    datetime. Naive datetimes and zone-less strings are taken as UTC.

    Raises:
        ConfigurationError: If the value is none of the above
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value > MAX_RELATIVE_EXPIRY_SECONDS:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        now = now or datetime.now(timezone.utc)
        return now + timedelta(seconds=value)

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ConfigurationError(f"Invalid expiry date string: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    raise ConfigurationError(f"Invalid expiry value: {value!r}")


def set_doc_expiry(
    doc: dict[str, Any],
    old_doc: dict[str, Any] | None,
    definition: DocumentDefinition,
    host: Host,
) -> datetime:
    """Resolve the definition's expiry for this write and pass it to the host."""
    value = resolve_constraint(definition.expiry, doc, resolve_old_doc(old_doc))
    try:
        expiry_date = resolve_expiry_date(value)
    except ConfigurationError as e:
        raise ConfigurationError(f'Invalid expiry value for document "{doc.get("_id")}": {value!r}') from e

    host.expiry(expiry_date)
    logger.debug("Document %r expires at %s", doc.get("_id"), expiry_date.isoformat())
    return expiry_date
