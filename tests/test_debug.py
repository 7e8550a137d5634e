"""Tests for the debug/logging manager."""

from c4engine.debug import DebugLevel, DebugManager, debug


def read(path):
    with open(path) as f:
        return f.read()


def test_file_logging_respects_level(tmp_path):
    log_file = tmp_path / "engine.log"
    debug.configure(level=DebugLevel.INFO, log_file=str(log_file))

    debug.info("game finished", "engine")
    debug.debug("hidden detail", "engine")
    debug.configure(log_file="")

    contents = read(log_file)
    assert "[engine] game finished" in contents
    assert "hidden detail" not in contents


def test_component_filter(tmp_path):
    log_file = tmp_path / "ai.log"
    debug.configure(level=DebugLevel.DEBUG, log_file=str(log_file), components=["ai"])

    debug.debug("scored columns", "ai")
    debug.debug("dropped disc", "engine")
    debug.configure(log_file="")

    contents = read(log_file)
    assert "scored columns" in contents
    assert "dropped disc" not in contents


def test_set_from_string():
    manager = DebugManager("c4engine.test")

    assert manager.set_from_string("trace")
    assert manager.level == DebugLevel.TRACE
    assert not manager.set_from_string("verbose")
    assert manager.level == DebugLevel.TRACE


def test_configure_from_env(tmp_path):
    manager = DebugManager("c4engine.test_env")
    log_file = tmp_path / "env.log"

    manager.configure_from_env({"C4ENGINE_DEBUG_LEVEL": "error",
                                "C4ENGINE_LOG_FILE": str(log_file)})
    manager.error("bad column", "cli")
    manager.warning("not shown", "cli")
    manager.configure(log_file="")

    assert manager.level == DebugLevel.ERROR
    contents = read(log_file)
    assert "bad column" in contents
    assert "not shown" not in contents


def test_timers():
    manager = DebugManager("c4engine.test_timer")

    manager.start_timer("work")
    elapsed = manager.end_timer("work")

    assert elapsed is not None and elapsed >= 0
    assert manager.end_timer("never started") is None

    with manager.timed("block"):
        pass
    assert manager.end_timer("block") is None
