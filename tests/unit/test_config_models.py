"""Tests for lifeos/config_models.py and args/lifeos.yaml"""

from lifeos import CONFIG_PATH
from lifeos.config_models import LifeOSConfig, load_and_validate


class TestLoadAndValidate:
    """Tests for config loading with fallback to defaults."""

    def test_shipped_config_is_valid(self):
        config = load_and_validate(CONFIG_PATH)

        assert config.ai.model == "gemini-2.0-flash"
        assert config.tasks.priority_limits.high == 1
        assert config.tasks.priority_limits.medium == 3
        assert config.tasks.priority_limits.low == 5
        assert config.gamification.level_width == 100

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_and_validate(tmp_path / "absent.yaml")
        assert config == LifeOSConfig()

    def test_partial_file_merges_defaults(self, tmp_path):
        path = tmp_path / "lifeos.yaml"
        path.write_text("store:\n  backend: memory\n")

        config = load_and_validate(path)

        assert config.store.backend == "memory"
        assert config.store.app_id == "life-os-default"
        assert config.tasks.default_points == 10

    def test_invalid_values_fall_back(self, tmp_path):
        path = tmp_path / "lifeos.yaml"
        path.write_text("gamification:\n  level_width: 0\n")

        assert load_and_validate(path).gamification.level_width == 100

    def test_malformed_yaml_falls_back(self, tmp_path):
        path = tmp_path / "lifeos.yaml"
        path.write_text("ai: [unclosed\n")

        assert load_and_validate(path) == LifeOSConfig()

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("MY_GEMINI_KEY", "secret")
        config = LifeOSConfig.model_validate({"ai": {"api_key_env": "MY_GEMINI_KEY"}})
        assert config.ai.resolve_api_key() == "secret"
