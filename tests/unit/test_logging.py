"""
Unit tests for Logging Configuration
"""
import logging
from unittest.mock import Mock, patch

from kickstarter_etl.core.logging import create_rotating_file_handler, get_logger, setup_logging


class TestCreateRotatingFileHandler:
    """Test create_rotating_file_handler function"""

    @patch('kickstarter_etl.core.logging.RotatingFileHandler')
    @patch('kickstarter_etl.core.logging.Path')
    def test_create_rotating_file_handler_defaults(self, mock_path, mock_handler_cls):
        """Test creating handler with default settings"""
        mock_path.return_value.parent.mkdir = Mock()
        mock_handler = Mock()
        mock_handler_cls.return_value = mock_handler

        handler = create_rotating_file_handler("./logs/test.log")

        assert handler == mock_handler
        mock_handler.setFormatter.assert_called_once()
        mock_handler.setLevel.assert_called_once_with(logging.DEBUG)

    @patch('kickstarter_etl.core.logging.RotatingFileHandler')
    @patch('kickstarter_etl.core.logging.Path')
    def test_create_rotating_file_handler_custom_size(self, mock_path, mock_handler_cls):
        """Test creating handler with custom size"""
        mock_path.return_value.parent.mkdir = Mock()

        create_rotating_file_handler("./logs/test.log", max_bytes=5000000, backup_count=3)

        call_kwargs = mock_handler_cls.call_args[1]
        assert call_kwargs['maxBytes'] == 5000000
        assert call_kwargs['backupCount'] == 3

    def test_creates_directory(self, tmp_path):
        """Test the log directory is created if missing"""
        log_path = tmp_path / "logs" / "subdir" / "etl.log"

        handler = create_rotating_file_handler(str(log_path))
        try:
            assert log_path.parent.is_dir()
        finally:
            handler.close()


class TestSetupLogging:
    """Test setup_logging function"""

    @patch('kickstarter_etl.core.logging.settings')
    @patch('kickstarter_etl.core.logging.logging.basicConfig')
    def test_uses_override_level(self, mock_basic_config, mock_settings):
        mock_settings.log_level = "INFO"
        mock_settings.log_to_file = False

        setup_logging("DEBUG")

        assert mock_basic_config.call_args[1]["level"] == logging.DEBUG

    @patch('kickstarter_etl.core.logging.create_rotating_file_handler')
    @patch('kickstarter_etl.core.logging.settings')
    @patch('kickstarter_etl.core.logging.logging.basicConfig')
    def test_adds_file_handler(self, mock_basic_config, mock_settings, mock_create_handler):
        mock_settings.log_level = "INFO"
        mock_settings.log_to_file = True
        mock_settings.log_file_path = "./logs/etl.log"
        handler = logging.NullHandler()
        mock_create_handler.return_value = handler

        try:
            setup_logging()

            mock_create_handler.assert_called_once_with("./logs/etl.log", level=logging.INFO)
            assert handler in logging.getLogger().handlers
        finally:
            logging.getLogger().removeHandler(handler)

    @patch('kickstarter_etl.core.logging.settings')
    @patch('kickstarter_etl.core.logging.logging.basicConfig')
    def test_quiets_sqlalchemy(self, mock_basic_config, mock_settings):
        mock_settings.log_level = "DEBUG"
        mock_settings.log_to_file = False

        setup_logging()

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestGetLogger:
    """Test get_logger function"""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("kickstarter_etl.test")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "kickstarter_etl.test"
