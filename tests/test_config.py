import logging

from budget_dashboard import config


def test_read_delay_falls_back_on_bad_values():
    assert config._read_delay(None) == config.DEFAULT_AI_ANALYSIS_DELAY
    assert config._read_delay('abc') == config.DEFAULT_AI_ANALYSIS_DELAY
    assert config._read_delay('-1') == config.DEFAULT_AI_ANALYSIS_DELAY
    assert config._read_delay('nan') == config.DEFAULT_AI_ANALYSIS_DELAY
    assert config._read_delay('0.25') == 0.25


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    try:
        config.configure_logging('debug')
        assert root.level == logging.DEBUG
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
