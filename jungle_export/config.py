"""Export settings collected before a run."""

import math
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError

DEFAULT_PROJECT_NAME = "default"
DEFAULT_INTERVAL = 8.0  # minutes

POPULATION_SCOPES = ("all", "frame")


@dataclass(frozen=True)
class ExportSettings:
    """
    Parameters of one export run.

    Attributes:
        project_name: Free text written into both documents.
        interval: Imaging interval in minutes, non-negative.
        destination: Output folder. ``None`` lets the exporter choose the
            image folder or the working directory.
        population_scope: ``"all"`` averages every visible spot of the
            model for each frame's population center; ``"frame"`` only
            averages the spots of that frame.
    """

    project_name: str = DEFAULT_PROJECT_NAME
    interval: float = DEFAULT_INTERVAL
    destination: Optional[Union[str, Path]] = None
    population_scope: str = "all"

    def __post_init__(self):
        if not isinstance(self.project_name, str) or not self.project_name.strip():
            raise ConfigurationError("Project name must be a non-empty string")
        if isinstance(self.interval, bool) or not isinstance(self.interval, Real):
            raise ConfigurationError(f"Imaging interval must be a number, got {self.interval!r}")
        if not math.isfinite(self.interval) or self.interval < 0:
            raise ConfigurationError(f"Imaging interval must be finite and >= 0, got {self.interval}")
        if self.population_scope not in POPULATION_SCOPES:
            raise ConfigurationError(
                f"Unknown population scope {self.population_scope!r}, "
                f"expected one of {', '.join(POPULATION_SCOPES)}"
            )
        if self.destination is not None:
            object.__setattr__(self, "destination", Path(self.destination).expanduser())
