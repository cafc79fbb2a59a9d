"""Visualization helpers for calibration traces."""
from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .domain import Circle, Sample


@dataclass(frozen=True)
class PlotConfig:
    """Configuration for calibration plot generation."""

    figsize: tuple[float, float] = (6.0, 6.0)
    dpi: float | None = None
    circle_resolution: int = 360
    invert_y: bool = True  # screen coordinates grow downwards
    tight_layout: bool = True
    show: bool = False


class CalibrationPlotter:
    """Draw the collected trace, the fitted circle and projected points."""

    def __init__(self, config: PlotConfig | None = None) -> None:
        self.config = config or PlotConfig()

    def plot(
        self,
        samples: Sequence[Sample],
        circle: Circle,
        projected: Optional[pd.DataFrame] = None,
        output_path: str | Path | None = None,
    ) -> Path:
        """Save a figure of the trace; ``projected`` is a frame from ``Projector.project_many``."""

        cfg = self.config
        try:
            matplotlib = import_module("matplotlib")
            if not cfg.show:
                matplotlib.use("Agg")
            plt = import_module("matplotlib.pyplot")
        except ModuleNotFoundError as exc:  # pragma: no cover - dependency is optional in CI
            raise ModuleNotFoundError(
                "matplotlib is required for plotting; install via `pip install matplotlib`."
            ) from exc

        fig, ax = plt.subplots(figsize=cfg.figsize, dpi=cfg.dpi)

        xs = [s.x for s in samples]
        ys = [s.y for s in samples]
        ax.scatter(xs, ys, s=8, label="samples")

        angles = np.linspace(0.0, np.pi * 2.0, cfg.circle_resolution)
        ax.plot(
            circle.cx + circle.r * np.sin(angles),
            circle.cy + circle.r * np.cos(angles),
            color="black",
            linewidth=1.0,
            label="fitted circle",
        )
        ax.plot([circle.cx], [circle.cy], marker="+", color="black")

        if projected is not None and len(projected):
            ax.scatter(
                projected["projected_x_px"],
                projected["projected_y_px"],
                s=10,
                color="red",
                label="projected",
            )

        period = f"{circle.period:.1f}" if circle.period is not None else "undefined"
        ax.set_title(f"r={circle.r:.1f}px  period={period}")
        ax.set_xlabel("x (px)")
        ax.set_ylabel("y (px)")
        ax.set_aspect("equal")
        if cfg.invert_y:
            ax.invert_yaxis()
        ax.legend()

        if cfg.tight_layout:
            plt.tight_layout()

        output_path = Path(output_path or "calibration_plot.png")
        fig.savefig(output_path)
        if cfg.show:  # pragma: no cover - UI-driven choice
            plt.show()
        plt.close(fig)
        return output_path


__all__ = ["CalibrationPlotter", "PlotConfig"]
