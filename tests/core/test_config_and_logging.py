import logging

from tbgen.core.config import Settings, get_settings
from tbgen.core.log import ROOT_LOGGER, configure_logging


def test_settings_defaults():
    settings = Settings()
    assert settings.RELEASE_CHANNELS == ["60", "68", "78", "91", "102"]
    assert settings.RECENT_ACTIVITY_DAYS == 14
    assert settings.COMPAT_PRODUCT_NAME == "Thunderbird"


def test_settings_env_override(monkeypatch):
    monkeypatch.setenv("RECENT_ACTIVITY_DAYS", "7")
    monkeypatch.setenv("RELEASE_CHANNELS", '["91", "102"]')
    settings = Settings()
    assert settings.RECENT_ACTIVITY_DAYS == 7
    assert settings.RELEASE_CHANNELS == ["91", "102"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_configure_logging_is_idempotent():
    settings = Settings(LOG_LEVEL="warning")
    configure_logging(settings)
    logger = configure_logging(settings)

    ours = [h for h in logger.handlers if getattr(h, "_tbgen", False)]
    assert logger.name == ROOT_LOGGER
    assert len(ours) == 1
    assert logger.level == logging.WARNING


def test_configure_logging_is_exported_from_core():
    from tbgen.core import configure_logging as exported

    assert exported is configure_logging


def test_configure_logging_debug_flag():
    logger = configure_logging(Settings(DEBUG=True))
    assert logger.level == logging.DEBUG
    configure_logging(Settings())
