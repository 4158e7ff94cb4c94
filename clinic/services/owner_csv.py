"""CSV export of clinic owners.

The export is split in two steps.  :func:`build_owners_csv` turns owner
records into RFC 4180 text and never fails.  :func:`export_owners_csv`
fetches the owners for a last-name prefix, refuses empty or oversized
result sets, encodes the rest and attaches the download headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from django.utils import timezone
from django.utils.http import http_date

from ..models import Owner
from ..queries import find_owners_by_last_name_prefix

logger = logging.getLogger(__name__)

CSV_HEADERS: Sequence[str] = ['First Name', 'Last Name', 'Address', 'City', 'Telephone']
CSV_CONTENT_TYPE = 'text/csv; charset=UTF-8'

# Owners beyond this count are rejected instead of encoded.
MAX_CSV_EXPORT_SIZE = 5000


class OwnerExportError(Exception):
    """Raised when an owner export cannot be produced."""

    status_code = 400


class NoOwnersFound(OwnerExportError):
    status_code = 404

    def __init__(self, message: str = 'No owners found matching the search criteria') -> None:
        super().__init__(message)


class OwnerExportTooLarge(OwnerExportError):
    status_code = 413

    def __init__(self, count: int, limit: int = MAX_CSV_EXPORT_SIZE) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f'Too many results ({count}). Maximum export size is {limit}. '
            'Please refine your search.'
        )


@dataclass(frozen=True)
class OwnerRecord:
    """The five exported owner columns; missing values stay ``None``."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    telephone: Optional[str] = None

    @classmethod
    def from_owner(cls, owner: Owner) -> 'OwnerRecord':
        return cls(
            first_name=owner.first_name,
            last_name=owner.last_name,
            address=owner.address,
            city=owner.city,
            telephone=owner.telephone,
        )

    def as_row(self) -> List[str]:
        return [
            '' if value is None else value
            for value in (self.first_name, self.last_name, self.address, self.city, self.telephone)
        ]


@dataclass
class OwnerCsvExport:
    """Encoded CSV body plus the headers needed to deliver it."""

    body: str
    filename: str
    row_count: int
    content_type: str = CSV_CONTENT_TYPE
    headers: Dict[str, str] = field(default_factory=dict)


# Only "\n" counts as an embedded line break; a bare "\r" is written as is.
_QUOTE_TRIGGERS = (',', '"', '\n')


def escape_field(value: str) -> str:
    """Quote ``value`` when it holds a comma, a double quote or a newline."""

    if any(trigger in value for trigger in _QUOTE_TRIGGERS):
        return '"' + value.replace('"', '""') + '"'
    return value


def _format_row(fields: Sequence[str]) -> str:
    return ','.join(escape_field(value) for value in fields) + '\n'


def build_owners_csv(records: Iterable[OwnerRecord]) -> str:
    """Return the CSV text for ``records``, header row first.

    Fields holding a comma, a double quote or ``\\n`` are quoted with inner
    quotes doubled; everything else is written verbatim.
    """

    lines = [_format_row(CSV_HEADERS)]
    lines.extend(_format_row(record.as_row()) for record in records)
    return ''.join(lines)


def export_filename(today: date) -> str:
    return f'owners-export-{today.isoformat()}.csv'


def download_headers(filename: str) -> Dict[str, str]:
    """Attachment and no-cache headers for a CSV download."""

    return {
        'Content-Disposition': f'attachment; filename="{filename}"',
        'Cache-Control': 'no-cache, no-store, must-revalidate',
        'Pragma': 'no-cache',
        'Expires': http_date(0),
    }


def export_owners_csv(
    last_name: Optional[str] = '',
    *,
    fetch: Callable[[str], Sequence[Owner | OwnerRecord]] = find_owners_by_last_name_prefix,
    today: Optional[date] = None,
) -> OwnerCsvExport:
    """Export every owner whose last name starts with ``last_name``.

    Raises :class:`NoOwnersFound` when nothing matches and
    :class:`OwnerExportTooLarge` when more than ``MAX_CSV_EXPORT_SIZE``
    owners match.  Both checks run before any encoding.
    """

    prefix = last_name or ''
    owners = fetch(prefix)
    count = len(owners)
    if count == 0:
        logger.info("Owner export for prefix %r matched nothing", prefix)
        raise NoOwnersFound()
    if count > MAX_CSV_EXPORT_SIZE:
        logger.warning(
            "Rejected owner export for prefix %r: %d rows exceeds limit of %d",
            prefix,
            count,
            MAX_CSV_EXPORT_SIZE,
        )
        raise OwnerExportTooLarge(count, MAX_CSV_EXPORT_SIZE)

    records = [
        owner if isinstance(owner, OwnerRecord) else OwnerRecord.from_owner(owner)
        for owner in owners
    ]
    body = build_owners_csv(records)
    filename = export_filename(today or timezone.localdate())
    logger.info("Exported %d owners for prefix %r as %s", count, prefix, filename)
    return OwnerCsvExport(
        body=body,
        filename=filename,
        row_count=count,
        headers=download_headers(filename),
    )
