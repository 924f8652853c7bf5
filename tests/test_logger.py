"""
Logging setup tests
"""

import logging

import pytest
import structlog

from shared.utils.logger import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging("test-service")


class TestSetupLogging:
    def test_level_override(self):
        setup_logging("test-service", log_level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_yaml_config_file(self, tmp_path):
        config_file = tmp_path / "logging.yaml"
        config_file.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  console:\n"
            "    class: logging.StreamHandler\n"
            "    level: ERROR\n"
            "root:\n"
            "  level: ERROR\n"
            "  handlers: [console]\n"
        )

        setup_logging("test-service", config_path=str(config_file))

        assert logging.getLogger().level == logging.ERROR

    def test_unreadable_config_falls_back_to_defaults(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("version: [unclosed\n")

        setup_logging("test-service", log_level="INFO", config_path=str(config_file))

        assert logging.getLogger().level == logging.INFO

    def test_service_name_added_to_events(self, capsys):
        setup_logging("test-service", log_level="INFO", log_format="json")

        structlog.get_logger("tests").info("hello", answer=42)

        assert '"service": "test-service"' in capsys.readouterr().out
