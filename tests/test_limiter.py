import random

import pytest

from trafficreplay.limiter import Limiter, parse_limit_options

GET = b"GET / HTTP/1.1\r\n\r\n"


class _Clock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


class _Output:
    def __init__(self):
        self.received = []
        self.closed = False

    def plugin_write(self, msg):
        self.received.append(msg)
        return len(msg)

    def close(self):
        self.closed = True


class _Input:
    def plugin_read(self):
        return GET


class _PacedInput(_Input):
    def __init__(self):
        self.speed_factor = 1.0


@pytest.mark.parametrize(
    "options, expected",
    [("10", (10, False)), ("0%", (0, True)), ("100%", (100, True)), ("abc", (0, False)), ("%5", (0, False))],
)
def test_parse_limit_options(options, expected):
    assert parse_limit_options(options) == expected


def test_output_limiter():
    output = _Output()
    limiter = Limiter(output, "10", clock=_Clock())
    for _ in range(100):
        limiter.plugin_write(GET)
    assert len(output.received) == 10


def test_output_limiter_window_resets():
    clock = _Clock()
    output = _Output()
    limiter = Limiter(output, "10", clock=clock)
    for _ in range(20):
        limiter.plugin_write(GET)
    clock.now += 1_000_000_001
    for _ in range(20):
        limiter.plugin_write(GET)
    assert len(output.received) == 20


def test_input_limiter():
    limiter = Limiter(_Input(), "10", clock=_Clock())
    passed = [msg for msg in (limiter.plugin_read() for _ in range(100)) if msg is not None]
    assert len(passed) == 10
    assert all(msg == GET for msg in passed)


def test_percent_limiter_blocks_all():
    output = _Output()
    limiter = Limiter(output, "0%", rng=random.Random(1))
    results = [limiter.plugin_write(GET) for _ in range(100)]
    assert output.received == []
    assert set(results) == {0}


def test_percent_limiter_passes_all():
    output = _Output()
    limiter = Limiter(output, "100%", rng=random.Random(1))
    for _ in range(100):
        limiter.plugin_write(GET)
    assert len(output.received) == 100


def test_write_returns_plugin_result():
    limiter = Limiter(_Output(), "100%")
    assert limiter.plugin_write(GET) == len(GET)


def test_self_paced_plugin_gets_speed_factor():
    plugin = _PacedInput()
    limiter = Limiter(plugin, "50%")
    assert plugin.speed_factor == 0.5
    assert all(not limiter.is_limited() for _ in range(100))


def test_write_to_reader_raises():
    limiter = Limiter(_Input(), "100%")
    with pytest.raises(BrokenPipeError):
        limiter.plugin_write(GET)


def test_read_from_writer_raises():
    limiter = Limiter(_Output(), "100%")
    with pytest.raises(BrokenPipeError):
        limiter.plugin_read()


def test_close_closes_plugin():
    output = _Output()
    Limiter(output, "10").close()
    assert output.closed is True


def test_str_mentions_limit():
    text = str(Limiter(_Output(), "10%"))
    assert text.startswith("Limiting ")
    assert "10" in text
    assert "isPercent: true" in text