import json

from ocean_world.events.logger import EventLogger
from ocean_world.events.console_log import ConsoleLogger, Verbosity


def test_event_logger_flushes_jsonl(tmp_path):
    path = tmp_path / "sub" / "events.jsonl"
    logger = EventLogger(str(path))
    logger.log("scene_start", 3, extra=1)
    assert not path.exists()
    logger.flush()
    record = json.loads(path.read_text().strip())
    assert record["type"] == "scene_start"
    assert record["frame"] == 3
    assert record["extra"] == 1


def test_event_logger_auto_flush(tmp_path):
    path = tmp_path / "events.jsonl"
    logger = EventLogger(str(path))
    for i in range(10):
        logger.log("resize", i)
    assert len(path.read_text().splitlines()) == 10
    assert logger.buffer == []


def test_agent_event_names(tmp_path):
    logger = EventLogger(str(tmp_path / "e.jsonl"))
    logger.log_agents(0, "added", 2)
    logger.log_agents(0, "removed", 1)
    logger.log_agents(0, "rebuilt", 4)
    assert [e["type"] for e in logger.buffer] == ["agent_added", "agent_removed", "agents_rebuilt"]


def test_disabled_logger_buffers_nothing(tmp_path):
    logger = EventLogger(str(tmp_path / "e.jsonl"))
    logger.enabled = False
    logger.log("scene_start")
    assert logger.buffer == []


def test_console_verbosity_filters():
    console = ConsoleLogger()
    console.set_verbosity(Verbosity.MINIMAL)
    assert console.should_print("[Init] ready")
    assert not console.should_print("[Shark] Added")
    console.set_verbosity(Verbosity.SCENE)
    assert console.should_print("[Shark] Added")
    assert not console.should_print("[Waves] rebuilt")
    console.set_verbosity(Verbosity.DETAIL)
    assert console.should_print("[Waves] rebuilt")
    assert not console.should_print("[Retarget] Shark 0")
    console.set_verbosity(Verbosity.FULL)
    assert console.should_print("[Retarget] Shark 0")
    assert console.should_print("plain status line")


def test_console_summary_counts_suppressed(capsys):
    console = ConsoleLogger()
    console.set_verbosity(Verbosity.MINIMAL)
    assert console.log("[Shark] Added") is False
    assert console.log("[Shark] Added") is False
    assert console.get_summary(10) is None
    assert console.get_summary(600) == "[Summary] Shark:2"
    assert capsys.readouterr().out == ""


def test_cycle_verbosity_wraps():
    console = ConsoleLogger()
    console.set_verbosity(Verbosity.FULL)
    console.cycle_verbosity()
    assert console.verbosity == Verbosity.MINIMAL
