# File: daygrid/models/placement.py
"""
Data models for the geometry the layout engine hands back to the renderer.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class Placement:
    """Horizontal placement of one event inside its day column."""
    column: int
    total_columns: int
    width_pct: float
    left_pct: float
    z_index: int
    opacity: float
    is_container: bool = False
    is_contained: bool = False

    def __post_init__(self):
        if not 0 <= self.column < self.total_columns:
            raise ValueError(
                f"Column {self.column} outside group of {self.total_columns}"
            )

    @property
    def right_pct(self) -> float:
        return self.left_pct + self.width_pct

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the output shape the rendering layer expects."""
        return {
            'column': self.column,
            'totalColumns': self.total_columns,
            'widthPct': self.width_pct,
            'leftPct': self.left_pct,
            'zIndex': self.z_index,
            'opacity': self.opacity,
        }


@dataclass
class LayoutParams:
    """Presentation heuristics for the layout engine."""
    base_opacity: float = 0.65
    opacity_step: float = 0.25
    max_opacity: float = 0.95
    group_width_pct: float = 95.0       # leaves a gutter for clicking the empty track
    container_opacity: float = 0.65
    container_z_index: int = 5
    contained_z_base: int = 10
    general_z_base: int = 20
    inset_left_pct: float = 4.0
    inset_scale: float = 0.92

    def __post_init__(self):
        if not 0 < self.group_width_pct <= 100:
            raise ValueError(f"group_width_pct must be in (0, 100], got {self.group_width_pct}")
        if not 0 < self.inset_scale <= 1:
            raise ValueError(f"inset_scale must be in (0, 1], got {self.inset_scale}")
        if self.inset_left_pct + 100 * self.inset_scale > 100:
            raise ValueError("Inset track would overflow the column")
        if not 0 <= self.base_opacity <= self.max_opacity < 1:
            raise ValueError("Opacities must satisfy 0 <= base <= max < 1")

    def opacity_for(self, column: int) -> float:
        """Stacked layers get progressively more opaque, clamped below 1.0."""
        return min(self.base_opacity + column * self.opacity_step, self.max_opacity)

    @classmethod
    def from_dict(cls, data: dict) -> 'LayoutParams':
        """Create LayoutParams from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
