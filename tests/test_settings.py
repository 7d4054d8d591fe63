import json
import logging

from todo_app.generate_openapi import generate_openapi
from todo_app.logging_config import JsonLogFormatter, configure_logging
from todo_app.session import PLACEHOLDER
from todo_app.settings import get_settings

ENV_VARS = ["CORS_ALLOW_ORIGINS", "LOG_LEVEL", "LOG_FORMAT", "BODY_PLACEHOLDER", "IMAGE_FETCH_TIMEOUT"]


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.cors_allow_origins == ["*"]
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.body_placeholder == PLACEHOLDER
        assert settings.image_fetch_timeout == 10.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("BODY_PLACEHOLDER", "Memo")
        monkeypatch.setenv("IMAGE_FETCH_TIMEOUT", "2.5")
        settings = get_settings()
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.body_placeholder == "Memo"
        assert settings.image_fetch_timeout == 2.5

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        monkeypatch.setenv("LOG_FORMAT", "xml")
        monkeypatch.setenv("IMAGE_FETCH_TIMEOUT", "soon")
        settings = get_settings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.image_fetch_timeout == 10.0


class TestLogging:
    def test_json_formatter_includes_extras(self):
        record = logging.makeLogRecord(
            {
                "name": "todo_app.store",
                "levelname": "INFO",
                "levelno": logging.INFO,
                "msg": "todo created",
                "event": "todo_created",
                "todo_id": "abc",
            }
        )
        payload = json.loads(JsonLogFormatter().format(record))
        assert payload["level"] == "info"
        assert payload["logger"] == "todo_app.store"
        assert payload["msg"] == "todo created"
        assert payload["event"] == "todo_created"
        assert payload["todo_id"] == "abc"

    def test_configure_logging_is_idempotent(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        logger = configure_logging(get_settings())
        configure_logging(get_settings())
        named = [h for h in logger.handlers if h.get_name() == "todo_app"]
        assert len(named) == 1
        assert isinstance(named[0].formatter, JsonLogFormatter)


def test_generate_openapi_writes_schema(tmp_path):
    out = generate_openapi(str(tmp_path / "interfaces" / "openapi.json"))
    with open(out, encoding="utf-8") as f:
        schema = json.load(f)
    assert "/api/v1/todos/" in schema["paths"]
    assert "/api/v1/sessions/{session_id}/confirm" in schema["paths"]
    assert {t["name"] for t in schema["tags"]} >= {"health", "todos", "sessions"}


def test_create_app_uses_settings(monkeypatch):
    from todo_app.main import create_app

    monkeypatch.setenv("BODY_PLACEHOLDER", "Memo")
    app = create_app()
    assert app.state.sessions.open().draft_body == "Memo"
    assert len(app.state.store) == 0


def test_image_loader_from_settings(monkeypatch):
    from todo_app.images import ImageLoader

    monkeypatch.setenv("IMAGE_FETCH_TIMEOUT", "3")
    loader = ImageLoader.from_settings(get_settings())
    assert loader.timeout == 3.0
