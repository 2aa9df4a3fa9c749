"""Tests for logging.py - structlog configuration."""

import logging

import structlog


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def setup_method(self):
        """Reset structlog before each test."""
        structlog.reset_defaults()

    def teardown_method(self):
        """Leave structlog unconfigured for other tests."""
        structlog.reset_defaults()

    def test_configure_logging_json_output(self):
        """Test configure_logging sets up JSON output."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True)
        assert structlog.is_configured()

    def test_configure_logging_console_output(self):
        """Test configure_logging sets up console output when json_output=False."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=False)
        assert structlog.is_configured()

    def test_configure_logging_accepts_level(self):
        """Test configure_logging accepts a level name, including unknown ones."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True, log_level="debug")
        assert structlog.is_configured()

        structlog.reset_defaults()
        configure_logging(json_output=True, log_level="NOPE")
        assert structlog.is_configured()

    def test_configure_logging_filters_below_level(self):
        """Test the level name selects the filtering logger."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True, log_level="warning")
        wrapper_class = structlog.get_config()["wrapper_class"]

        assert wrapper_class is structlog.make_filtering_bound_logger(logging.WARNING)


class TestLogOutput:
    """Tests for the configured processor chain."""

    def setup_method(self):
        """Reset structlog before each test."""
        structlog.reset_defaults()

    def teardown_method(self):
        """Leave structlog unconfigured for other tests."""
        structlog.reset_defaults()

    def test_json_log_format(self):
        """Test JSON output ends with the JSON renderer."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True)
        processors = structlog.get_config()["processors"]

        assert processors[-1].__class__.__name__ == "JSONRenderer"

    def test_json_log_has_timestamp(self):
        """Test JSON logs include ISO timestamp processor."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True)
        processors = structlog.get_config()["processors"]

        assert any(isinstance(p, structlog.processors.TimeStamper) for p in processors)

    def test_json_log_has_callsite_info(self):
        """Test JSON logs include filename, func_name, lineno."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=True)
        processors = structlog.get_config()["processors"]

        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder)
            for p in processors
        )

    def test_log_can_bind_extra_fields(self):
        """Test logger can bind monitor context."""
        from media_monitor.logging import configure_logging

        configure_logging(json_output=False)
        bound_log = structlog.get_logger().bind(monitor="VID-ACME-channel")

        assert hasattr(bound_log, "info")
        assert hasattr(bound_log, "bind")
