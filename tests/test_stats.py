import threading

from trafficreplay.stats import GorStat


def _fields(stat):
    name, _, rest = str(stat).partition(":")
    return name, rest.split(",")


def test_write_tracks_latest_max_and_count():
    stat = GorStat("queue", 1000)
    values = [5, 42, 7]
    for v in values:
        stat.write(v)
    assert stat.latest == values[-1]
    assert stat.maximum == max(values)
    assert stat.count == len(values)
    assert min(values) <= stat.mean <= max(values)


def test_mean_of_equal_values():
    stat = GorStat("queue", 1000)
    for _ in range(5):
        stat.write(9)
    assert stat.mean == 9


def test_zero_does_not_move_mean():
    stat = GorStat("queue", 1000)
    stat.write(8)
    stat.write(0)
    assert stat.mean == 8
    assert stat.count == 2
    assert stat.latest == 0


def test_disabled_ignores_writes():
    stat = GorStat("queue", 1000, enabled=False)
    stat.write(100)
    assert (stat.latest, stat.mean, stat.maximum, stat.count) == (0, 0, 0, 0)


def test_reset():
    stat = GorStat("queue", 1000)
    stat.write(3)
    stat.write(4)
    stat.reset()
    assert (stat.latest, stat.mean, stat.maximum, stat.count) == (0, 0, 0, 0)


def test_str_format():
    stat = GorStat("queue", 1000)
    stat.write(6)
    stat.write(6)
    name, fields = _fields(stat)
    assert name == "queue"
    assert len(fields) == 6
    assert fields[:5] == ["6", "6", "6", "2", "2"]
    assert int(fields[5]) >= 1


def test_reporting_emits_header_then_stats():
    stat = GorStat("queue", 1000)
    stat.write(11)
    lines = []
    ready = threading.Event()

    def emit(line):
        lines.append(line)
        if len(lines) >= 2:
            ready.set()

    stat.start_reporting(emit)
    assert ready.wait(5)
    stat.stop()
    assert lines[0] == "queue:latest,mean,max,count,count/second,gcount"
    assert lines[1].startswith("queue:11,11,11,1,")
    assert stat.count == 0