# File: daygrid/core/config_manager.py
"""
Centralized configuration management for daygrid.
Loads settings from environment variables and an optional layout file.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, List
from dotenv import load_dotenv
import pytz

from daygrid.models import LayoutParams, SnapParams
from daygrid.utils.logger import setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from daygrid/core/

    CONFIG_DIR = Path(os.getenv("DAYGRID_CONFIG_DIR", str(BASE_DIR / "config")))

    # Files
    LAYOUT_CONFIG_FILE = CONFIG_DIR / "layout.json"

    # Application Settings
    TIMEZONE = os.getenv("DAYGRID_TIMEZONE", "Europe/Amsterdam")

    # Time grid
    CELL_HEIGHT_PX = float(os.getenv("DAYGRID_CELL_HEIGHT_PX", "60"))
    SNAP_MINUTES = int(os.getenv("DAYGRID_SNAP_MINUTES", "15"))
    HEADER_OFFSET_PX = float(os.getenv("DAYGRID_HEADER_OFFSET_PX", "40"))

    # Layout heuristics (presentation only, see LayoutParams)
    BASE_OPACITY = float(os.getenv("DAYGRID_BASE_OPACITY", "0.65"))
    OPACITY_STEP = float(os.getenv("DAYGRID_OPACITY_STEP", "0.25"))
    MAX_OPACITY = float(os.getenv("DAYGRID_MAX_OPACITY", "0.95"))
    GROUP_WIDTH_PCT = float(os.getenv("DAYGRID_GROUP_WIDTH_PCT", "95"))

    @classmethod
    def load_layout_config(cls) -> Dict[str, Any]:
        """Load optional layout overrides from JSON file."""
        if not cls.LAYOUT_CONFIG_FILE.exists():
            logger.debug(f"No layout overrides at {cls.LAYOUT_CONFIG_FILE}")
            return {}

        with open(cls.LAYOUT_CONFIG_FILE, 'r', encoding='utf-8') as f:
            return json.load(f)

    @classmethod
    def layout_params(cls) -> LayoutParams:
        """Layout heuristics from the environment, overridden by layout.json."""
        data = {
            'base_opacity': cls.BASE_OPACITY,
            'opacity_step': cls.OPACITY_STEP,
            'max_opacity': cls.MAX_OPACITY,
            'group_width_pct': cls.GROUP_WIDTH_PCT,
        }
        data.update(cls.load_layout_config().get('layout', {}))
        return LayoutParams.from_dict(data)

    @classmethod
    def snap_params(cls) -> SnapParams:
        """Snap grid from the environment, overridden by layout.json."""
        data = {
            'snap_minutes': cls.SNAP_MINUTES,
            'header_offset_px': cls.HEADER_OFFSET_PX,
        }
        data.update(cls.load_layout_config().get('snap', {}))
        return SnapParams.from_dict(data)

    @classmethod
    def timezone(cls):
        return pytz.timezone(cls.TIMEZONE)

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configured values are usable."""
        errors: List[str] = []

        if cls.CELL_HEIGHT_PX <= 0:
            errors.append(f"DAYGRID_CELL_HEIGHT_PX must be positive, got {cls.CELL_HEIGHT_PX}")

        if cls.SNAP_MINUTES <= 0 or 60 % cls.SNAP_MINUTES != 0:
            errors.append(f"DAYGRID_SNAP_MINUTES must divide 60, got {cls.SNAP_MINUTES}")

        if cls.TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"Unknown timezone: {cls.TIMEZONE}")

        try:
            cls.layout_params()
        except (ValueError, TypeError, json.JSONDecodeError) as e:
            errors.append(f"Invalid layout configuration: {e}")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
