import ssl

import pytest

from trafficreplay.kafka import KafkaMessage, KafkaTLSConfig, new_tls_context


SOURCE_JSON = (
    '{"Req_URL":"/","Req_Type":"1","Req_ID":"2","Req_Ts":"3",'
    '"Req_Method":"GET","Req_Headers":{"Header":"1"}}'
)


def test_json_message_dumps_to_wire_format():
    msg = KafkaMessage.from_json(SOURCE_JSON)
    assert msg.dump() == b"1 2 3\nGET / HTTP/1.1\r\nHeader: 1\r\n\r\n"


def test_from_json_accepts_bytes():
    msg = KafkaMessage.from_json(SOURCE_JSON.encode())
    assert msg.req_method == "GET"
    assert msg.req_headers == {"Header": "1"}


def test_missing_fields_default_to_empty():
    msg = KafkaMessage.from_json('{"Req_Method":"POST"}')
    assert msg.req_url == ""
    assert msg.req_body == ""
    assert msg.req_headers == {}


def test_body_is_appended_after_blank_line():
    msg = KafkaMessage(
        req_url="/x", req_type="1", req_id="abc", req_ts="10",
        req_method="POST", req_body="payload",
    )
    dumped = msg.dump()
    head, _, body = dumped.partition(b"\r\n\r\n")
    assert body == b"payload"
    assert head.startswith(b"1 abc 10\nPOST /x HTTP/1.1")


def test_headers_keep_their_order():
    msg = KafkaMessage(req_method="GET", req_url="/", req_headers={"A": "1", "B": "2"})
    dumped = msg.dump()
    assert dumped.index(b"A: 1\r\n") < dumped.index(b"B: 2\r\n")


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        KafkaMessage.from_json("not json")


def test_non_object_json_raises():
    with pytest.raises(ValueError):
        KafkaMessage.from_json("[1, 2]")


def test_tls_cert_without_key_raises():
    with pytest.raises(ValueError, match="Missing key of client certificate in kafka"):
        new_tls_context("client.crt", "", "")


def test_tls_key_without_cert_raises():
    with pytest.raises(ValueError, match="missing TLS client certificate in kafka"):
        new_tls_context("", "client.key", "")


def test_tls_context_without_files_verifies_servers():
    context = new_tls_context("", "", "")
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True


def test_tls_missing_ca_file_raises(tmp_path):
    with pytest.raises(OSError):
        new_tls_context("", "", str(tmp_path / "absent.pem"))


def test_tls_config_defaults():
    config = KafkaTLSConfig()
    assert (config.ca_cert, config.client_cert, config.client_key) == ("", "", "")