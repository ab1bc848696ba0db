"""
Static rendering of contours and solutions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from gmodal import Contour, Solution

CONTOUR_COLORS = ["#edc240", "#afd8f8", "#cb4b4b", "#4da74d", "#9440ed"]
SOLUTION_COLOR = "#bbbbbb"


def plot_modes(
    contours: Sequence[Contour],
    solutions: Sequence[Solution],
    reference_curves: Optional[Dict[str, List[np.ndarray]]] = None,
    title: str = "",
    save_path: Optional[Path] = None,
):
    """
    Draw solutions (grey), contours (cycled colours) and reference curves
    in the first two coordinates.

    Args:
        contours: Contours to draw as closed curves
        solutions: Solutions to draw as open curves
        reference_curves: Extra named curves (e.g. a limit cycle)
        title: Figure title
        save_path: Save to this path instead of showing

    Returns:
        The matplotlib Figure
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 8))

    for solution in solutions:
        _, pts = solution.as_arrays()
        if len(pts):
            ax.plot(pts[:, 0], pts[:, 1], color=SOLUTION_COLOR, linewidth=0.8)

    for i, contour in enumerate(contours):
        _, pts = contour.as_arrays()
        if len(pts) == 0:
            continue
        closed = np.vstack([pts, pts[:1]])
        ax.plot(
            closed[:, 0],
            closed[:, 1],
            color=CONTOUR_COLORS[i % len(CONTOUR_COLORS)],
            label=f"step {contour.step}",
        )

    for name, curve in (reference_curves or {}).items():
        pts = np.vstack(curve)
        ax.plot(pts[:, 0], pts[:, 1], color="black", linewidth=3.0, label=name)

    ax.set_xlabel("x")
    ax.set_ylabel("x'")
    ax.set_aspect("equal", adjustable="datalim")
    if title:
        ax.set_title(title)
    ax.legend(loc="upper right", fontsize=8)

    if save_path:
        fig.savefig(save_path, dpi=200, bbox_inches="tight")
        print(f"Saved figure to {save_path}")
    else:
        plt.show()
    plt.close(fig)
    return fig
