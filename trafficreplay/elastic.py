"""Helpers for exporting request/response pairs to ElasticSearch."""

from __future__ import annotations

from urllib.parse import urlsplit

__all__ = ["ElasticURIError", "parse_es_uri", "rtt_duration_to_ms"]

_SECOND_NS = 1_000_000_000


class ElasticURIError(ValueError):
    """The ElasticSearch URL does not name both a host and an index."""

    def __init__(self) -> None:
        super().__init__(
            "Wrong ElasticSearch URL format. Expected to be: scheme://host/index_name"
        )


def parse_es_uri(uri: str) -> str:
    """Return the index named by ``scheme://[user[:password]@]host/index_name``.

    Raises ElasticURIError when the URL is malformed or lacks host or index.
    """
    try:
        parts = urlsplit(uri)
        parts.port  # validates the port
    except ValueError:
        raise ElasticURIError() from None

    host = parts.netloc.rpartition("@")[2]
    index = parts.path.split("/")[-1]
    if not host or not index:
        raise ElasticURIError()
    return index


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    quotient = abs(a) // b
    if a < 0:
        quotient = -quotient
    return quotient, a - quotient * b


def rtt_duration_to_ms(duration_ns: int) -> int:
    """Round-trip time value stored with exported records.

    Whole seconds plus the sub-second remainder expressed in milliseconds,
    truncated to an integer.
    """
    sec, nsec = _trunc_divmod(int(duration_ns), _SECOND_NS)
    return int(float(sec) + float(nsec) * 1e-6)