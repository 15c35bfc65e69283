"""Tests for analysis configuration."""

from bindmodel.analyzer.config import AnalysisConfig


class TestAnalysisConfig:
    """Test cases for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.strict is False
        assert config.trace_symbols is True
        assert config.make_id("geo", "", "NewPoint") == "geo_NewPoint"

    def test_from_env(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("BINDMODEL_STRICT", "yes")
        monkeypatch.setenv("BINDMODEL_TRACE_SYMBOLS", "0")

        # Act
        config = AnalysisConfig.from_env()

        # Assert
        assert config.strict is True
        assert config.trace_symbols is False

    def test_from_env_without_variables(self, monkeypatch):
        monkeypatch.delenv("BINDMODEL_STRICT", raising=False)
        monkeypatch.delenv("BINDMODEL_TRACE_SYMBOLS", raising=False)

        assert AnalysisConfig.from_env() == AnalysisConfig()
