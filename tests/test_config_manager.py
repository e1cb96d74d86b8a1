"""Tests for settings persistence."""

import json

import pytest

from colorpage.config_manager import ConfigManager
from colorpage.models import (
    ComplexityLevel,
    LineWeight,
    PageSize,
    ProcessingSettings,
)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "nested" / "config.json"


class TestConfigManager:

    def test_missing_file_gives_defaults(self, config_path):
        assert ConfigManager(config_path).load() == ProcessingSettings()

    def test_save_then_load(self, config_path):
        settings = ProcessingSettings(
            edge_threshold=80.0,
            line_weight=LineWeight.THICK,
            complexity_level=ComplexityLevel.COMPLEX,
            morphology_radius=3,
            brightness_offset=-10,
            page_size=PageSize.LETTER,
        )
        manager = ConfigManager(config_path)
        assert manager.save(settings) == (True, None)
        assert manager.load() == settings

    def test_enums_saved_by_value(self, config_path):
        ConfigManager(config_path).save(ProcessingSettings(line_weight=LineWeight.THIN))
        data = json.loads(config_path.read_text())
        assert data["line_weight"] == "thin"
        assert data["complexity_level"] == "moderate"

    def test_bad_values_fall_back_individually(self, config_path, capsys):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "edge_threshold": -5,
            "line_weight": "heavy",
            "gaussian_radius": "wide",
            "morphology_radius": 3,
            "contrast_factor": 2,
            "brightness_offset": 1.5,
            "unknown_key": True,
        }))

        settings = ConfigManager(config_path).load()

        assert settings.edge_threshold == 50.0
        assert settings.line_weight is LineWeight.MEDIUM
        assert settings.gaussian_radius == 1.5
        assert settings.morphology_radius == 3
        assert settings.contrast_factor == 2.0
        assert settings.brightness_offset == 0
        assert capsys.readouterr().out.count("Warning") == 4

    def test_corrupt_file_gives_defaults(self, config_path, capsys):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{not json")
        assert ConfigManager(config_path).load() == ProcessingSettings()
        assert "Could not load config file" in capsys.readouterr().out

    def test_non_object_json_gives_defaults(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[1, 2, 3]")
        assert ConfigManager(config_path).load() == ProcessingSettings()

    def test_reset_removes_file(self, config_path):
        manager = ConfigManager(config_path)
        manager.save(ProcessingSettings(edge_threshold=10.0))
        assert manager.reset() == (True, None)
        assert not config_path.exists()
        assert manager.reset() == (True, None)
