"""
Loads users and connections from a flat CSV file.

Each row is ``id,name,handle[,neighbor_id...]``. Rows with fewer
than three fields or with non-integer ids are skipped.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Union

import structlog

from .graph import SocialGraph
from ..errors import DataFileError

logger = structlog.get_logger(__name__)

MIN_FIELDS = 3

Row = Union[str, bytes]


@dataclass
class LoadRecord:
    """One parsed row of the data file."""
    user_id: int
    name: str
    handle: str
    neighbor_ids: List[int] = field(default_factory=list)


@dataclass
class LoadStats:
    """Counts from a load."""
    records_loaded: int = 0
    rows_skipped: int = 0
    connections_added: int = 0


def parse_line(line: str, delimiter: str = ",") -> LoadRecord:
    """
    Parse a single row.

    Raises ValueError when the row is too short or an id is not
    an integer.
    """
    fields = [item.strip() for item in line.rstrip("\r\n").split(delimiter)]
    if len(fields) < MIN_FIELDS:
        raise ValueError(f"expected at least {MIN_FIELDS} fields, got {len(fields)}")

    user_id = int(fields[0])
    # Trailing delimiters leave empty neighbor fields
    neighbor_ids = [int(item) for item in fields[MIN_FIELDS:] if item]
    return LoadRecord(
        user_id=user_id,
        name=fields[1],
        handle=fields[2],
        neighbor_ids=neighbor_ids,
    )


def parse_records(lines: Iterable[Row], delimiter: str = ",") -> Iterator[LoadRecord]:
    """
    Yield a record for every well-formed row, skipping the rest.

    Rows may be text or raw UTF-8 bytes. A byte row that does not
    decode is skipped like any other malformed row.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            record = parse_line(line, delimiter)
        except ValueError as exc:
            logger.warning("row_skipped", line=line_number, reason=str(exc))
            continue
        yield record


def apply_records(graph: SocialGraph, records: Iterable[LoadRecord]) -> LoadStats:
    """Add each record's user, then its connections, in record order."""
    stats = LoadStats()
    for record in records:
        graph.add_user(record.user_id, record.name, record.handle)
        for neighbor_id in record.neighbor_ids:
            graph.add_connection(record.user_id, neighbor_id)
            stats.connections_added += 1
        stats.records_loaded += 1
    return stats


def load_lines(graph: SocialGraph, lines: Iterable[Row], delimiter: str = ",") -> LoadStats:
    """Load rows from any iterable of text or byte lines."""
    lines = list(lines)
    stats = apply_records(graph, parse_records(lines, delimiter))
    stats.rows_skipped = sum(1 for line in lines if line.strip()) - stats.records_loaded
    return stats


def load_from_csv(graph: SocialGraph, path: str, delimiter: str = ",") -> LoadStats:
    """
    Load a data file into a graph.

    Rows are decoded one at a time, so a row with bad bytes is
    skipped without aborting the load. Raises DataFileError if the
    file cannot be opened.
    """
    try:
        data_file = open(path, "rb")
    except OSError as exc:
        raise DataFileError(path, str(exc)) from exc

    with data_file:
        stats = load_lines(graph, data_file, delimiter)

    logger.info(
        "network_loaded",
        path=path,
        records=stats.records_loaded,
        skipped=stats.rows_skipped,
        connections=stats.connections_added,
    )
    return stats
