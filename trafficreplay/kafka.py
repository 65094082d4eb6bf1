"""Kafka message format and TLS settings for Kafka connections."""

from __future__ import annotations

import json
import ssl
from dataclasses import dataclass, field
from typing import Optional, Union

__all__ = ["KafkaTLSConfig", "KafkaMessage", "new_tls_context"]

_CRLF = b"\r\n"


@dataclass(frozen=True)
class KafkaTLSConfig:
    """Paths of the certificates used to reach a secured Kafka cluster."""

    ca_cert: str = ""
    client_cert: str = ""
    client_key: str = ""


@dataclass
class KafkaMessage:
    """A captured request as exchanged with Kafka in JSON form."""

    req_url: str = ""
    req_type: str = ""
    req_id: str = ""
    req_ts: str = ""
    req_method: str = ""
    req_body: str = ""
    req_headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "KafkaMessage":
        """Build a message from its JSON document.

        Raises ValueError when ``raw`` is not a JSON object.
        """
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise ValueError("kafka message must be a JSON object")
        headers = document.get("Req_Headers") or {}
        if not isinstance(headers, dict):
            raise ValueError("Req_Headers must be a JSON object")
        return cls(
            req_url=str(document.get("Req_URL", "")),
            req_type=str(document.get("Req_Type", "")),
            req_id=str(document.get("Req_ID", "")),
            req_ts=str(document.get("Req_Ts", "")),
            req_method=str(document.get("Req_Method", "")),
            req_body=str(document.get("Req_Body", "")),
            req_headers={str(k): str(v) for k, v in headers.items()},
        )

    def dump(self) -> bytes:
        """The payload header line followed by the HTTP/1.1 wire request."""
        parts = [
            f"{self.req_type} {self.req_id} {self.req_ts}\n".encode(),
            f"{self.req_method} {self.req_url} HTTP/1.1".encode(),
            _CRLF,
        ]
        for key, value in self.req_headers.items():
            parts.append(f"{key}: {value}".encode())
            parts.append(_CRLF)
        parts.append(_CRLF)
        parts.append(self.req_body.encode())
        return b"".join(parts)


def new_tls_context(
    client_cert_file: Optional[str],
    client_key_file: Optional[str],
    ca_cert_file: Optional[str],
) -> ssl.SSLContext:
    """Client TLS context loading an optional client key pair and CA bundle.

    Raises ValueError when only one half of the client key pair is given.
    """
    if client_cert_file and not client_key_file:
        raise ValueError("Missing key of client certificate in kafka")
    if client_key_file and not client_cert_file:
        raise ValueError("missing TLS client certificate in kafka")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    if client_cert_file and client_key_file:
        context.load_cert_chain(client_cert_file, client_key_file)
    if ca_cert_file:
        context.load_verify_locations(cafile=ca_cert_file)
    else:
        context.load_default_certs(ssl.Purpose.SERVER_AUTH)
    return context