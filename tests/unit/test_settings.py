"""
Unit tests for configuration (config/settings.py).
"""

import pytest
from pydantic import ValidationError

from paramfinder.config.settings import MinerConfig, ParamFinderSettings
from paramfinder.core.models import AttackSurface


class TestMinerConfig:

    def test_defaults(self):
        config = MinerConfig()

        assert config.attack_type is AttackSurface.QUERY
        assert config.json_body_path is None
        assert config.update_content_length
        assert not config.cache_buster_enabled
        assert not config.autopilot_enabled

    def test_blank_path_is_none(self):
        assert MinerConfig(json_body_path="   ").json_body_path is None
        assert MinerConfig(json_body_path=" data ").json_body_path == "data"

    def test_either_toggle_enables_cache_buster(self):
        assert MinerConfig(add_cache_buster_parameter=True).cache_buster_enabled
        assert MinerConfig(cache_buster_parameter=True).cache_buster_enabled

    def test_assignment_validated(self):
        config = MinerConfig()
        config.attack_type = "body"
        assert config.attack_type is AttackSurface.BODY

        with pytest.raises(ValidationError):
            config.attack_type = "cookies"


class TestParamFinderSettings:

    def test_env_nested(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        clean_env.setenv("PARAMFINDER_MINER__ATTACK_TYPE", "headers")
        clean_env.setenv("PARAMFINDER_MINER__JSON_BODY_PATH", "data.user")
        clean_env.setenv("PARAMFINDER_HTTP__TIMEOUT", "5")

        settings = ParamFinderSettings()

        assert settings.miner.attack_type is AttackSurface.HEADERS
        assert settings.miner.json_body_path == "data.user"
        assert settings.http.timeout == 5.0

    def test_defaults(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        settings = ParamFinderSettings()

        assert settings.log_level == "WARNING"
        assert not settings.http.follow_redirects
