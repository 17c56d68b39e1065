import logging

from outline_navigator.config import ConfigManager
from outline_navigator.logging_config import _apply_debug_overrides


def test_packaged_defaults_are_loaded(isolated_config):
    view = ConfigManager().get_outline_view()

    assert view["glyphs"] == {"expanded": "▼", "collapsed": "▶"}
    assert view["placeholder"] == "No outline available"
    assert ConfigManager().get_logging_config()["version"] == 1


def test_config_manager_is_a_singleton(isolated_config):
    assert ConfigManager() is ConfigManager()


def test_user_overrides_are_merged(isolated_config):
    (isolated_config / "outline_view.yml").write_text("indent: 8\nplaceholder: Nothing here\n", encoding="utf-8")
    ConfigManager.reset()

    view = ConfigManager().get_outline_view()

    assert view["indent"] == 8
    assert view["placeholder"] == "Nothing here"
    # Untouched keys keep their packaged value
    assert view["glyphs"]["collapsed"] == "▶"


def test_invalid_user_override_is_ignored(isolated_config, caplog):
    (isolated_config / "outline_view.yml").write_text("indent: [unclosed\n", encoding="utf-8")
    ConfigManager.reset()

    with caplog.at_level(logging.ERROR, logger="outline_navigator.config.manager"):
        view = ConfigManager().get_outline_view()

    assert view["indent"] == 4
    assert "Could not parse user config" in caplog.text


def test_debug_override_env_raises_logger_level(monkeypatch):
    name = "outline_navigator.tests.debug_probe"
    monkeypatch.setenv("OUTLINE_NAVIGATOR_DEBUG_MODULES", f" {name} ,")
    probe = logging.getLogger(name)
    try:
        _apply_debug_overrides()
        assert probe.level == logging.DEBUG
        assert any(h.level <= logging.DEBUG for h in probe.handlers)
    finally:
        probe.setLevel(logging.NOTSET)
        for handler in list(probe.handlers):
            probe.removeHandler(handler)
