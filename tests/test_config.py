import json
import logging

import pytest

from sadhana_coach.config import Settings
from sadhana_coach.exceptions import ConfigurationError
from sadhana_coach.logging_config import JsonFormatter, get_logger


def test_default_settings_are_valid():
    Settings().validate()


@pytest.mark.parametrize("overrides", [
    {"pose_visibility_threshold": 1.5},
    {"pose_visibility_threshold": -0.1},
    {"pose_jitter_spread": -1.0},
    {"port": 0},
])
def test_invalid_settings_raise(overrides):
    with pytest.raises(ConfigurationError):
        Settings(**overrides).validate()


def test_cors_origin_list():
    settings = Settings(cors_origins="http://a.test, http://b.test,")
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_json_formatter_includes_pose_id():
    record = logging.LogRecord(
        name="sadhana_coach.pose_analyzer",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Low visibility on %s",
        args=("tree_pose",),
        exc_info=None,
    )
    record.pose_id = "tree_pose"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["severity"] == "WARNING"
    assert payload["message"] == "Low visibility on tree_pose"
    assert payload["pose_id"] == "tree_pose"
    assert "session_id" not in payload


def test_get_logger_uses_json_on_cloud_run(monkeypatch):
    monkeypatch.setenv("CLOUD_RUN", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    logger = get_logger("sadhana_coach.tests.cloud")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
    assert get_logger("sadhana_coach.tests.cloud").handlers == logger.handlers


def test_get_logger_ignores_unknown_level(monkeypatch):
    monkeypatch.delenv("CLOUD_RUN", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    logger = get_logger("sadhana_coach.tests.console")

    assert logger.level == logging.INFO
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)
