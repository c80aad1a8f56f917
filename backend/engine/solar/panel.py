"""PV panel / plant parameters shared by the thermal and PR models."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PanelParameters:
    """Panel parameters for a single yield calculation.

    Default values describe a 100 m^2 crystalline-silicon array
    (18 % module efficiency, -0.45 %/degC, NOCT 45 degC).
    """

    area: float = 100.0                 # total module area (m^2)
    efficiency: float = 0.18            # nominal efficiency at STC (0-1)
    temp_coeff: float = 0.0045          # power temperature coefficient (1/degC)
    noct: float = 45.0                  # nominal operating cell temp (degC)
    performance_ratio: float = 0.8      # PR used by the proportional model (0-1)

    def __post_init__(self) -> None:
        for name in ("area", "efficiency", "temp_coeff", "noct", "performance_ratio"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        if self.area <= 0:
            raise ValueError(f"area must be positive, got {self.area}")
        if not 0.0 < self.efficiency <= 1.0:
            raise ValueError(f"efficiency must be in (0, 1], got {self.efficiency}")
        if self.temp_coeff < 0:
            raise ValueError(f"temp_coeff must be non-negative, got {self.temp_coeff}")
        if not 0.0 < self.performance_ratio <= 1.0:
            raise ValueError(
                f"performance_ratio must be in (0, 1], got {self.performance_ratio}"
            )

    @property
    def nominal_capacity_kwp(self) -> float:
        """Plant capacity at STC (kWp): 1 kW/m^2 * area * efficiency."""
        return self.area * self.efficiency
