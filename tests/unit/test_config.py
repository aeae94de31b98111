"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from differing.config import (
    DEFAULT_CONFIG,
    Config,
    ConfigLoadError,
    ConfigSourceName,
    ConfigValidationError,
    LogFormat,
    LogLevel,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    safe_load_config,
    set_nested_key,
)
from differing.utils import get_user_config_path


class TestDeepMerge:
    def test_nested_dicts_merge(self) -> None:
        base = {"server": {"host": "localhost", "port": 1}}
        override = {"server": {"port": 2}}

        merged = deep_merge(base, override)

        assert merged == {"server": {"host": "localhost", "port": 2}}

    def test_inputs_are_not_modified(self) -> None:
        base = {"a": {"b": [1, 2]}}
        override = {"a": {"c": 3}}

        merged = deep_merge(base, override)
        merged["a"]["b"].append(3)

        assert base == {"a": {"b": [1, 2]}}
        assert override == {"a": {"c": 3}}

    def test_scalar_replaces_dict(self) -> None:
        assert deep_merge({"a": {"b": 1}}, {"a": 5}) == {"a": 5}


class TestParseStringValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("3844", 3844),
            ("1.5", 1.5),
            ("0.0.0.0", "0.0.0.0"),
            ('["a", "b"]', ["a", "b"]),
            ('{"k": 1}', {"k": 1}),
            ("[not json", "[not json"),
            ("git", "git"),
        ],
    )
    def test_infers_type(self, raw: str, expected: object) -> None:
        assert parse_string_value(raw) == expected


class TestParseEnvVars:
    def test_nested_keys(self) -> None:
        environ = {
            "DIFFERING_SERVER__PORT": "9000",
            "DIFFERING_GIT__TIMEOUT_MS": "2500",
            "DIFFERING_LOGGING__LEVEL": "debug",
        }

        assert parse_env_vars(environ=environ) == {
            "server": {"port": 9000},
            "git": {"timeout_ms": 2500},
            "logging": {"level": "debug"},
        }

    def test_ignores_switches_and_other_prefixes(self) -> None:
        environ = {
            "DIFFERING_DEBUG": "1",
            "DIFFERING_STRICT_CONFIG": "1",
            "SERVER__PORT": "1",
        }

        assert parse_env_vars(environ=environ) == {}


class TestSetNestedKey:
    def test_creates_intermediate_dicts(self) -> None:
        d: dict[str, object] = {}
        set_nested_key(d, "a.b.c", 1)

        assert d == {"a": {"b": {"c": 1}}}

    def test_replaces_scalar_parent(self) -> None:
        d: dict[str, object] = {"a": 1}
        set_nested_key(d, "a.b", 2)

        assert d == {"a": {"b": 2}}


class TestReadTomlFile:
    def test_reads_table(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[server]\nhost = "0.0.0.0"\n')

        assert read_toml_file(path) == {"server": {"host": "0.0.0.0"}}

    def test_parse_error_has_location(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[server]\nport = = 1\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(path)

        assert exc_info.value.path == path
        assert "line 2" in str(exc_info.value)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(tmp_path / "missing.toml")


class TestConfigFromDict:
    def test_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.server.host == DEFAULT_CONFIG["server"]["host"]
        assert config.server.port == 3844
        assert config.server.open_browser is False
        assert config.git.executable == "git"
        assert config.git.timeout_ms == 10000
        assert config.git.max_commits == 20
        assert config.logging.level is LogLevel.INFO
        assert config.logging.format is LogFormat.TEXT
        assert config.static_dir is None

    def test_static_dir(self, tmp_path: Path) -> None:
        config = Config.from_dict({"server": {"static_dir": str(tmp_path)}})

        assert config.static_dir == tmp_path

    @pytest.mark.parametrize(
        ("data", "key"),
        [
            ({"server": {"port": 70000}}, "server.port"),
            ({"server": {"port": -1}}, "server.port"),
            ({"git": {"timeout_ms": 0}}, "git.timeout_ms"),
            ({"git": {"max_commits": 0}}, "git.max_commits"),
            ({"logging": {"level": "loud"}}, "logging.level"),
            ({"server": {"bogus": 1}}, "server.bogus"),
        ],
    )
    def test_invalid_values(self, data: dict[str, object], key: str) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict(data, source="test")

        assert exc_info.value.key == key
        assert exc_info.value.source == "test"

    def test_unknown_section_is_ignored(self) -> None:
        config = Config.from_dict({"future": {"flag": True}})

        assert config.server.port == 3844

    def test_config_is_frozen(self) -> None:
        config = Config.from_dict({})

        with pytest.raises(ValueError):
            config.server.port = 1  # pyright: ignore[reportAttributeAccessIssue]


class TestConfigLoad:
    def _write(self, path: Path, port: int) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"[server]\nport = {port}\n")
        return path

    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        user = self._write(tmp_path / "user.toml", 1000)
        explicit = self._write(tmp_path / "explicit.toml", 2000)

        assert Config.load(user_config_path=user).server.port == 1000
        assert (
            Config.load(user_config_path=user, config_path=explicit).server.port == 2000
        )

        monkeypatch.setenv("DIFFERING_SERVER__PORT", "3000")
        assert (
            Config.load(user_config_path=user, config_path=explicit).server.port == 3000
        )

        config = Config.load(
            user_config_path=user,
            config_path=explicit,
            cli_overrides={"server": {"port": 4000}},
        )
        assert config.server.port == 4000
        assert [s.name for s in config.sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.FILE,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_env_can_be_excluded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIFFERING_SERVER__PORT", "3000")

        assert Config.load(include_user=False, include_env=False).server.port == 3844

    def test_missing_user_file_is_skipped(self, tmp_path: Path) -> None:
        config = Config.load(user_config_path=tmp_path / "absent.toml")

        assert [s.name for s in config.sources] == [ConfigSourceName.DEFAULT]

    def test_from_file(self, tmp_path: Path) -> None:
        path = self._write(tmp_path / "config.toml", 5000)

        config = Config.from_file(path)

        assert config.server.port == 5000
        assert config.sources[0].path == path


class TestSafeLoadConfig:
    def test_success(self) -> None:
        config, error = safe_load_config(cli_overrides={"git": {"timeout_ms": 500}})

        assert error is None
        assert config.git.timeout_ms == 500

    def test_missing_explicit_file_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=tmp_path / "missing.toml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_broken_user_config_falls_back(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        user = get_user_config_path()
        user.parent.mkdir(parents=True, exist_ok=True)
        user.write_text("[server\n")

        config, error = safe_load_config(cli_overrides={"server": {"port": 4100}})

        assert error is not None
        assert "Failed to load config" in error
        assert config.server.port == 4100
        assert "Warning:" in capsys.readouterr().err

    def test_strict_mode_exits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIFFERING_STRICT_CONFIG", "1")
        monkeypatch.setenv("DIFFERING_SERVER__PORT", "99999")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config()

        assert exc_info.value.code == 1
