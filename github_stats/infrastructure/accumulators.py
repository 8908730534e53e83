import sys
import time
from typing import List, Mapping, Optional, TextIO

from influxdb_client import Point, WritePrecision


def to_line_protocol(
    name: str,
    tags: Mapping[str, str],
    fields: Mapping[str, int],
    timestamp_ns: int,
) -> str:
    """
    Formats one record as an InfluxDB line, e.g.
    ``repository_info,repository=owner/name forks_count=2i,stargazers_count=1i 1666569600000000000``
    """
    point = Point(name)
    for key, value in sorted(tags.items()):
        point.tag(key, value)
    for key, value in sorted(fields.items()):
        point.field(key, int(value))
    return point.time(timestamp_ns, WritePrecision.NS).to_line_protocol()


class LineProtocolAccumulator:
    """
    Accumulator that writes counters as InfluxDB line protocol to a text stream.
    Errors are only kept here, for the caller to pick an exit status; the
    collector service logs them when they happen.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.errors: List[Exception] = []

    def emit(self, name: str, tags: Mapping[str, str], fields: Mapping[str, int]) -> None:
        self.stream.write(to_line_protocol(name, tags, fields, time.time_ns()) + "\n")
        self.stream.flush()

    def add_error(self, error: Exception) -> None:
        self.errors.append(error)
