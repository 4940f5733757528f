import logging

import pytest

from tracker.config_manager import get_config, load_runtime_config
from tracker.exceptions import ConfigError
from tracker.logger import get_logger, setup_logging


def test_runtime_yaml_overrides_known_keys_only(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("TASKS_FILENAME: supplements.json\nNOT_A_SETTING: 1\n", encoding="utf-8")

    cfg = get_config(path)

    assert cfg.TASKS_FILENAME == "supplements.json"
    assert cfg.ENTRIES_FILENAME == "entries.json"
    assert not hasattr(cfg, "NOT_A_SETTING")


def test_missing_or_empty_runtime_yaml_gives_defaults(tmp_path):
    assert load_runtime_config(tmp_path / "absent.yaml") == {}
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_runtime_config(empty) == {}


def test_non_mapping_runtime_yaml_is_config_error(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc:
        load_runtime_config(path)

    assert str(path) in exc.value.get_user_message()


def test_setup_logging_writes_system_and_error_logs(tmp_path):
    root = setup_logging(logs_dir=tmp_path)
    try:
        get_logger("tests").info("hello")
        get_logger("tests").error("boom")
        for handler in root.handlers:
            handler.flush()

        assert "hello" in (tmp_path / "system.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "error.log").read_text(encoding="utf-8")
        assert "boom" in error_log
        assert "hello" not in error_log
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)


def test_get_logger_namespaces():
    assert get_logger("rule_evaluator").name == "daily_tracker.rule_evaluator"
    assert get_logger().name == "daily_tracker"
    assert isinstance(get_logger(), logging.Logger)
