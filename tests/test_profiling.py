import io

from geno.profiling import Timer, format_duration


def test_format_microseconds():
    assert format_duration(500) == "500us"


def test_format_milliseconds():
    assert format_duration(1500) == "1.5ms"


def test_format_seconds():
    assert format_duration(2_000_000) == "2s"


def test_format_unit_boundaries():
    assert format_duration(999).endswith("us")
    assert format_duration(1000).endswith("ms")
    assert format_duration(999_999).endswith("ms")
    assert format_duration(1_000_000).endswith("s")
    assert not format_duration(1_000_000).endswith("ms")


def test_stop_writes_and_returns_line():
    stream = io.StringIO()
    timer = Timer("build", stream)
    line = timer.stop()
    assert stream.getvalue() == line
    assert line.startswith("build ")
    assert line.endswith("s\n")
    assert timer.stopped is True


def test_context_manager_reports_once():
    stream = io.StringIO()
    with Timer("parse", stream):
        pass
    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("parse ")


def test_context_manager_after_manual_stop_does_not_report_again():
    stream = io.StringIO()
    with Timer("link", stream) as timer:
        timer.stop()
    assert len(stream.getvalue().splitlines()) == 1