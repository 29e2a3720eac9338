"""
Tests for configuration loading.
"""

import pytest
from pathlib import Path

from finance_tracker.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        """Test values used when nothing is configured."""
        settings = AppSettings()
        assert settings.max_transactions == 2000
        assert settings.chart_width == 50
        assert settings.log_level == "INFO"
        assert settings.debug_mode is False

    def test_environment_override(self, monkeypatch):
        """Test FINANCE_TRACKER_* variables are picked up."""
        monkeypatch.setenv("FINANCE_TRACKER_MAX_TRANSACTIONS", "25")
        monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "debug")
        settings = AppSettings()
        assert settings.max_transactions == 25
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path):
        """Test a .env file in the working directory is read."""
        (tmp_path / ".env").write_text("FINANCE_TRACKER_CHART_WIDTH=80\n", encoding="utf-8")
        assert AppSettings().chart_width == 80

    def test_rejects_zero_capacity(self, monkeypatch):
        """Test capacity must be at least one."""
        monkeypatch.setenv("FINANCE_TRACKER_MAX_TRANSACTIONS", "0")
        with pytest.raises(ValueError):
            AppSettings()

    def test_rejects_unknown_log_level(self, monkeypatch):
        """Test log level names are checked."""
        monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="Unknown log level"):
            AppSettings()


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_default_data_file(self):
        """Test the default data file name."""
        assert StorageSettings().data_file == Path("finance_data.txt")

    def test_rejects_directory(self, tmp_path, monkeypatch):
        """Test the data file cannot be a directory."""
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_DATA_FILE", str(tmp_path))
        with pytest.raises(ValueError, match="directory"):
            StorageSettings()


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_all_valid(self):
        """Test a clean environment validates."""
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is True

    def test_reports_errors(self, monkeypatch):
        """Test a bad value is reported, not raised."""
        monkeypatch.setenv("FINANCE_TRACKER_CHART_WIDTH", "1")
        get_settings.cache_clear()
        results = validate_all_settings()
        assert results["app"] is False
        assert "chart_width" in results["app_error"]
        assert results["storage"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
