"""
Tests for toolagents/config.py - AgentConfig.
"""

import os

import pytest

from toolagents.config import AgentConfig


class TestAgentConfig:

    def test_default_ports(self):
        assert AgentConfig(agent="memory").port == 3002
        assert AgentConfig(agent="file").port == 3001
        assert AgentConfig(agent="task").port == 3004

    def test_unknown_agent(self):
        with pytest.raises(ValueError):
            AgentConfig(agent="intent")

    def test_port_range(self):
        with pytest.raises(ValueError):
            AgentConfig(agent="memory", port=70000)

    def test_log_level_normalized(self):
        assert AgentConfig(agent="memory", log_level="debug").log_level == "DEBUG"

    def test_bad_log_level(self):
        with pytest.raises(ValueError):
            AgentConfig(agent="memory", log_level="verbose")

    def test_override(self):
        config = AgentConfig(agent="memory").override(host="127.0.0.1", port=9000)

        assert config.host == "127.0.0.1"
        assert config.port == 9000

    def test_override_validates(self):
        with pytest.raises(ValueError):
            AgentConfig(agent="memory").override(port=0)


class TestFromEnv:

    def test_defaults(self):
        config = AgentConfig.from_env("memory", environ={})

        assert config.port == 3002
        assert config.host == "0.0.0.0"
        assert config.log_level == "INFO"
        assert config.data_directory is None
        assert config.sweep_interval == 60.0

    def test_agent_specific_wins_over_generic(self):
        env = {"MEMORY_AGENT_PORT": "4100", "PORT": "4200"}
        assert AgentConfig.from_env("memory", environ=env).port == 4100

    def test_generic_fallback(self):
        assert AgentConfig.from_env("task", environ={"PORT": "4200"}).port == 4200

    def test_data_directory(self):
        env = {"MEMORY_AGENT_DATA": "/var/lib/memory"}
        assert AgentConfig.from_env("memory", environ=env).data_directory == "/var/lib/memory"

    def test_sweep_interval(self):
        env = {"MEMORY_SWEEP_INTERVAL": "0"}
        assert AgentConfig.from_env("memory", environ=env).sweep_interval == 0.0

    def test_file_roots(self):
        env = {"FILE_AGENT_ROOTS": os.pathsep.join(["/srv/a", "/srv/b"])}
        assert AgentConfig.from_env("file", environ=env).allowed_roots == ["/srv/a", "/srv/b"]

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="memory"):
            AgentConfig.from_env("memory", environ={"PORT": "abc"})

    def test_negative_sweep(self):
        with pytest.raises(ValueError):
            AgentConfig.from_env("memory", environ={"MEMORY_SWEEP_INTERVAL": "-1"})
