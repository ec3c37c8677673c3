# File: tests/unit/test_config.py
"""
Unit tests for configuration loading and validation.
"""

import json

import pytest

from daygrid.core.config_manager import Config

pytestmark = pytest.mark.unit


@pytest.fixture
def layout_file(tmp_path, monkeypatch):
    """Point Config at a temporary layout.json."""
    path = tmp_path / "layout.json"
    monkeypatch.setattr(Config, "LAYOUT_CONFIG_FILE", path)
    return path


class TestConfig:

    def test_defaults_without_layout_file(self, layout_file):
        params = Config.layout_params()
        snap = Config.snap_params()

        assert params.base_opacity == pytest.approx(0.65)
        assert params.group_width_pct == pytest.approx(95.0)
        assert snap.snap_minutes == 15
        assert snap.header_offset_px == 40

    def test_layout_file_overrides(self, layout_file):
        layout_file.write_text(json.dumps({
            'layout': {'group_width_pct': 90, 'inset_left_pct': 2},
            'snap': {'snap_minutes': 30},
        }))

        assert Config.layout_params().group_width_pct == 90
        assert Config.layout_params().inset_left_pct == 2
        assert Config.snap_params().snap_minutes == 30

    def test_validate_defaults(self, layout_file):
        assert Config.validate() is True

    def test_validate_rejects_bad_values(self, layout_file, monkeypatch, caplog):
        monkeypatch.setattr(Config, "SNAP_MINUTES", 7)
        monkeypatch.setattr(Config, "TIMEZONE", "Mars/Olympus_Mons")

        assert Config.validate() is False
        assert "DAYGRID_SNAP_MINUTES" in caplog.text
        assert "Unknown timezone" in caplog.text

    def test_validate_rejects_bad_layout_file(self, layout_file):
        layout_file.write_text(json.dumps({'layout': {'group_width_pct': 150}}))
        assert Config.validate() is False
