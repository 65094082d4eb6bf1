# trafficreplay

Pure-Python building blocks for tools that record live HTTP traffic and replay
it elsewhere: position-based byte editing, option collections for an HTTP
traffic modifier, BPF filter expressions for capture interfaces, capture engine
and link-layer helpers, a pcap file writer, a rate limiter for plugins, a
running statistic, Kafka message handling and Elasticsearch URI handling.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `trafficreplay.byteutils`

`cut(data, start, end)`, `insert(data, index, chunk)` and
`replace(data, start, end, chunk)` return new byte strings. An out-of-range
position raises `IndexError`.

```python
from trafficreplay.byteutils import cut, insert, replace

cut(b"123456", 2, 4)              # b"1256"
insert(b"123456", 2, b"abcd")     # b"12abcd3456"
replace(b"123456", 2, 5, b"ab")   # b"12ab6"
```

### `trafficreplay.modifier_settings`

List types filled one option string at a time with `add(value)`; a malformed
string or an invalid regular expression raises `ValueError`:

- `HeaderFilters` – `name:regexp`, giving `HeaderFilter` items.
- `BasicAuthFilters` – a regexp, giving `BasicAuthFilter` items.
- `HashFilters` – `name:N%` or the older `name:a/b` fraction, giving
  `HashFilter(name, percent)` items.
- `HeaderSetters` – `Key: Value`, giving `HeaderValue` items.
- `ParamSetters` – `Key=Value`, giving `ParamValue` items.
- `MethodList` – a method name, stored as bytes.
- `URLRewrites` – `regexp:target`, giving `URLRewrite` items.
- `HeaderRewrites` – `Header: regexp,target`, giving `HeaderRewrite` items.
- `URLPatterns` – a regexp, giving `URLPattern` items.

Patterns are compiled as bytes regular expressions. `ModifierConfig` groups
one of each collection (`url_regexp`, `url_negative_regexp`, `url_rewrite`,
`header_rewrite`, `header_filters`, `header_negative_filters`,
`header_basic_auth_filters`, `header_hash_filters`, `param_hash_filters`,
`params`, `headers`, `methods`) and `is_empty()` tells whether none is set.

```python
from trafficreplay.modifier_settings import HashFilters, ModifierConfig

filters = HashFilters()
filters.add("Header1:1/2")
filters[0].percent                     # 50

config = ModifierConfig()
config.is_empty()                      # True
config.methods.add("GET")
config.is_empty()                      # False
```

### `trafficreplay.pcap`

`PcapWriter(stream, nanos=False)` writes libpcap v2.4 little-endian files with
microsecond (or, with `nanos=True`, nanosecond) timestamps.
`write_file_header(snaplen, link_type)` writes the global header;
`write_packet(info, data)` writes a record described by
`CaptureInfo(capture_length, length, timestamp_ns=None)`, using the current
time when `timestamp_ns` is `None`. A capture length that differs from the data
length or exceeds `length` raises `ValueError`.

### `trafficreplay.capture_filters`

`Interface(name, addresses)` describes a capture device. `ports_filter`,
`hosts_filter`, `listen_all`, `is_device` and `interface_addresses` are the
pieces used by `build_filter(host, ports, interface, transport="tcp",
promiscuous=False, track_response=False)`, which returns the BPF expression for
traffic to `host` and, with `track_response`, from it.

```python
from trafficreplay.capture_filters import ports_filter

ports_filter("tcp", "dst", [80, 8080])  # "tcp dst port 80 or tcp dst port 8080"
ports_filter("tcp", "dst", [])          # "tcp dst portrange 0-65535"
```

### `trafficreplay.engines`

`EngineType` (`PCAP`, `PCAP_FILE`, `RAW_SOCKET`, `AF_PACKET`) with
`EngineType.parse(name)` for `"libpcap"` (or `""`), `"pcap_file"`,
`"raw_socket"` and `"af_packet"`; `str()` gives the name back. `LinkType` lists
known data link types, `link_type_length(link_type)` gives the link-layer
header size (`ValueError` if unknown), and
`afpacket_compute_size(target_size_mb, snaplen, page_size)` returns
`(frame_size, block_size, num_blocks)` for an AF_PACKET ring.

### `trafficreplay.limiter`

`Limiter(plugin, options)` wraps any object with `plugin_read()` and/or
`plugin_write(msg)`. `"10"` lets at most 10 messages per second through;
`"10%"` keeps about 10 percent of them. A plugin with a `speed_factor`
attribute is given `limit / 100` as its speed instead of having messages
dropped. `plugin_read()` returns `None` for a dropped message; a call the
plugin does not support raises `BrokenPipeError`. `parse_limit_options`
returns `(limit, is_percent)`.

### `trafficreplay.stats`

`GorStat(name, rate_ms, enabled=True)` keeps `latest`, `mean`, `maximum` and
`count`. `write(value)` records, `reset()` clears, and
`start_reporting(emit)` calls `emit` with a header line and then the stat every
`rate_ms` milliseconds in a background thread, resetting after each report,
until `stop()`.

### `trafficreplay.kafka`

`KafkaMessage.from_json(raw)` reads a record with `Req_URL`, `Req_Type`,
`Req_ID`, `Req_Ts`, `Req_Method`, `Req_Body` and `Req_Headers`; `dump()` returns
the meta line followed by the HTTP/1.1 request. `KafkaTLSConfig` holds
certificate paths, and `new_tls_context(client_cert_file, client_key_file,
ca_cert_file)` builds a client `ssl.SSLContext`, raising `ValueError` when only
one half of the client key pair is given.

### `trafficreplay.elastic`

`parse_es_uri("http://host/index_name")` returns `"index_name"` and raises
`ElasticURIError` when the host or the index is missing.
`rtt_duration_to_ms(duration_ns)` converts a round-trip time for storage.

## What this package does not do

It is a library of parts, with no command-line program. It does not capture
packets from network interfaces, read or write capture or request files, run
HTTP or TCP listeners, forward or replay requests, apply the modifier options
to requests, connect to Kafka or Elasticsearch, or start middleware processes.