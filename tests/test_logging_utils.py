import json

from app import logging_utils


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    logging_utils.get_logger("dungeon.test").debug(event="phase", phase="carve maze", ms=1.5, skipped=None)
    err = capsys.readouterr().err.strip()
    assert err.startswith("level=debug ts=")
    assert "event=phase" in err
    assert "phase=carve_maze" in err
    assert "ms=1.5" in err
    assert "logger=dungeon.test" in err
    assert "skipped" not in err


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    log = logging_utils.get_logger("dungeon.test")
    log.info(event="quiet")
    log.error(event="loud")
    err = capsys.readouterr().err
    assert "quiet" not in err
    assert "event=loud" in err


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    logging_utils.log.info(event="dungeon_generated", seed=42, runtime_ms=None)
    rec = json.loads(capsys.readouterr().err.strip())
    assert rec["event"] == "dungeon_generated"
    assert rec["seed"] == 42
    assert rec["level"] == "info"
    assert "runtime_ms" not in rec


def test_set_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.CURRENT_LEVEL)
    logging_utils.set_level("ERROR")
    assert logging_utils.CURRENT_LEVEL == 40


def test_logger_cache():
    assert logging_utils.get_logger("a.b") is logging_utils.get_logger("a.b")
    assert logging_utils.get_logger("dungeon") is logging_utils.log


def test_generation_emits_summary(monkeypatch, capsys):
    from app.dungeon import generate

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    generate(20, 20, 10, 3, 6, seed=77)
    err = capsys.readouterr().err
    assert "event=dungeon_generated" in err
    assert "seed=77" in err
    assert "logger=dungeon.pipeline" in err
