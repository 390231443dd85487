"""Unit tests for configuration."""

import pytest
import yaml
from pydantic import ValidationError

from prizzle.core.config import Config
from prizzle.schema.naming import NamingStyle


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = Config()

        assert config.system.log_level == "INFO"
        assert config.builder.naming_style == NamingStyle.DRIZZLE
        assert config.generator.default_varchar_length == 255
        assert config.generator.provider_override is None

    def test_from_yaml(self, tmp_path):
        """Test sections are read from YAML."""
        config_file = tmp_path / "prizzle.yaml"
        config_file.write_text(yaml.dump({
            "builder": {"naming_style": "prisma"},
            "generator": {"default_varchar_length": 191, "provider_override": "mysql"},
        }))

        config = Config.from_yaml(config_file)

        assert config.builder.naming_style == NamingStyle.PRISMA
        assert config.generator.default_varchar_length == 191
        assert config.generator.provider_override == "mysql"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_length(self):
        with pytest.raises(ValidationError):
            Config(generator={"default_varchar_length": 0})

    def test_environment(self, monkeypatch):
        """Test nested settings from environment variables."""
        monkeypatch.setenv("PRIZZLE_GENERATOR__DEFAULT_VARCHAR_LENGTH", "100")

        assert Config().generator.default_varchar_length == 100

    def test_save_yaml_round_trip(self, tmp_path):
        config = Config(builder={"naming_style": "prisma"})
        output = tmp_path / "out" / "config.yaml"

        config.save_yaml(output)

        assert Config.from_yaml(output).to_dict() == config.to_dict()
        assert yaml.safe_load(output.read_text())["builder"]["naming_style"] == "prisma"
