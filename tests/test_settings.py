"""Tests for monitor_config.settings — settings loading and validation."""

from __future__ import annotations

import json

import pytest

from monitor_config.settings import (
    DEFAULT_SETTINGS,
    _sanitize_json_text,
    load_settings,
    validate_settings,
)


# ------------------------------------------------------------------
# DEFAULT_SETTINGS
# ------------------------------------------------------------------

class TestDefaultSettings:

    def test_contains_all_expected_keys(self):
        assert set(DEFAULT_SETTINGS) == {'layout_file', 'kscreen_doctor', 'command_timeout', 'debug'}

    def test_default_layout_file(self):
        assert DEFAULT_SETTINGS['layout_file'] == '~/.config/monitor_config'


# ------------------------------------------------------------------
# validate_settings
# ------------------------------------------------------------------

class TestValidateSettings:

    def test_valid_data_passes(self):
        result = validate_settings({
            'layout_file': '/tmp/layout',
            'kscreen_doctor': '/usr/bin/kscreen-doctor',
            'command_timeout': 3,
            'debug': True,
        })
        assert result['layout_file'] == '/tmp/layout'
        assert result['command_timeout'] == 3.0
        assert result['debug'] is True

    def test_none_returns_defaults(self):
        assert validate_settings(None) == DEFAULT_SETTINGS

    def test_null_timeout_allowed(self):
        assert validate_settings({'command_timeout': None})['command_timeout'] is None

    @pytest.mark.parametrize("value", ['abc', 0, -1, True])
    def test_invalid_timeout(self, value):
        with pytest.raises(ValueError, match="command_timeout"):
            validate_settings({'command_timeout': value})

    def test_invalid_layout_file(self):
        with pytest.raises(ValueError, match="layout_file"):
            validate_settings({'layout_file': ''})

    def test_invalid_binary(self):
        with pytest.raises(ValueError, match="kscreen_doctor"):
            validate_settings({'kscreen_doctor': 42})

    def test_invalid_debug_type(self):
        with pytest.raises(ValueError, match="debug"):
            validate_settings({'debug': 'yes'})


# ------------------------------------------------------------------
# _sanitize_json_text
# ------------------------------------------------------------------

class TestSanitizeJsonText:

    def test_removes_comments_and_trailing_commas(self):
        text = '{\n  # comment\n  "debug": true, // note\n}'
        assert json.loads(_sanitize_json_text(text)) == {"debug": True}

    def test_keeps_double_slash_inside_values(self):
        text = '{"layout_file": "/tmp//layout",}'
        assert json.loads(_sanitize_json_text(text)) == {"layout_file": "/tmp//layout"}


# ------------------------------------------------------------------
# load_settings
# ------------------------------------------------------------------

class TestLoadSettings:

    def test_nonexistent_file_returns_defaults(self, tmp_path):
        assert load_settings(str(tmp_path / "nope.json")) == DEFAULT_SETTINGS

    def test_merges_over_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"layout_file": "/srv/layout"}))
        result = load_settings(str(path))
        assert result['layout_file'] == "/srv/layout"
        assert result['kscreen_doctor'] == 'kscreen-doctor'

    def test_loads_file_with_comments(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{\n  # verbose\n  "debug": true,\n}')
        assert load_settings(str(path))['debug'] is True

    def test_invalid_file_ignored(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text('{"command_timeout": "soon"}')
        with caplog.at_level("WARNING"):
            result = load_settings(str(path))
        assert result == DEFAULT_SETTINGS
        assert "command_timeout" in caplog.text

    def test_non_object_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('[1, 2]')
        assert load_settings(str(path)) == DEFAULT_SETTINGS

    def test_default_location(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg_dir = tmp_path / ".config" / "monitor-config"
        cfg_dir.mkdir(parents=True)
        (cfg_dir / "settings.json").write_text('{"kscreen_doctor": "kd"}')
        assert load_settings()['kscreen_doctor'] == "kd"

    def test_undecodable_file_ignored(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_bytes(b'{"debug": \xff}')
        with caplog.at_level("WARNING"):
            assert load_settings(str(path)) == DEFAULT_SETTINGS
        assert str(path) in caplog.text
