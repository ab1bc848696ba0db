#!/usr/bin/env python3
"""
Solve Modes - Evolve an oscillator's initial curve and dump contours and solutions.

Usage: python tools/solve_modes.py [config.json] [--model NAME] [--output out.json] [--viz]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gmodal import SamplingOptions, SolveConfig, summarize_ensemble  # noqa: E402
from tools.common.oscillators import MODELS, build_modes  # noqa: E402

DEFAULT_CONFIG = "tools/sample_configs/solve_modes.json"

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Input/Output Data Structures
# -----------------------------------------------------------------------------


@dataclass
class SolveModesInput:
    """Input: model, integration settings and sampling options."""

    model: str
    solve: Optional[SolveConfig] = None
    curve_points: int = 60
    contours: SamplingOptions = field(default_factory=SamplingOptions)
    solutions: SamplingOptions = field(default_factory=lambda: SamplingOptions(sample_count=4))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SolveModesInput:
        solve = SolveConfig.from_dict(d["solve"]) if "solve" in d else None
        return cls(
            model=d["model"],
            solve=solve,
            curve_points=d.get("curve_points", 60),
            contours=SamplingOptions.from_dict(d.get("contours", {})),
            solutions=SamplingOptions.from_dict(d.get("solutions", {"sample_count": 4})),
        )

    @classmethod
    def from_json(cls, path: Path) -> SolveModesInput:
        with open(path) as f:
            return cls.from_dict(json.load(f))


@dataclass
class SolveModesOutput:
    """Summary and extracted records of one run."""

    model: str
    summary: Dict[str, Any]
    contours: List[Any]
    solutions: List[Any]
    reference_curves: Dict[str, Any] = field(default_factory=dict)
    extra_summaries: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    extra_contours: Dict[str, List[Any]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "summary": self.summary,
            "contours": [c.to_dict() for c in self.contours],
            "solutions": [s.to_dict() for s in self.solutions],
            "extra_modes": {
                name: {
                    "summary": self.extra_summaries[name],
                    "contours": [c.to_dict() for c in contours],
                }
                for name, contours in self.extra_contours.items()
            },
        }


# -----------------------------------------------------------------------------
# Core
# -----------------------------------------------------------------------------


def solve_modes(inp: SolveModesInput) -> SolveModesOutput:
    """Build the model's ensemble and extract contours and solutions."""
    modes = build_modes(inp.model, inp.solve, inp.curve_points)
    mode = modes.mode

    contours = mode.get_contours(inp.contours)
    solutions = mode.get_solutions(inp.solutions)
    logger.info(
        f"{inp.model}: {len(contours)} contours, {len(solutions)} solutions"
    )

    return SolveModesOutput(
        model=inp.model,
        summary=summarize_ensemble(mode),
        contours=contours,
        solutions=solutions,
        reference_curves=modes.reference_curves,
        extra_summaries={
            name: summarize_ensemble(extra) for name, extra in modes.extra_modes.items()
        },
        extra_contours={
            name: extra.get_contours(inp.contours)
            for name, extra in modes.extra_modes.items()
        },
    )


# -----------------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------------


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[1])
    parser.add_argument("config", nargs="?", default=DEFAULT_CONFIG, help="Config JSON")
    parser.add_argument("--model", choices=sorted(MODELS), default=None, help="Override model")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON output here")
    parser.add_argument("--viz", action="store_true", help="Show visualization")
    parser.add_argument(
        "--save-viz", type=Path, default=None, help="Save visualization"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def print_summary(output: SolveModesOutput) -> None:
    print("\n" + "=" * 70)
    print(f"MODES: {output.model}")
    print("=" * 70)
    for key, value in output.summary.items():
        print(f"  {key}: {value}")

    print("\n" + "-" * 70)
    print("CONTOURS")
    print("-" * 70)
    for contour in output.contours:
        t = f"{min(contour.parameter):.3f}" if contour.parameter else "-"
        print(f"  step {contour.step:>5}  points={len(contour):>4}  t_min={t}")

    print("\n" + "-" * 70)
    print("SOLUTIONS")
    print("-" * 70)
    for solution in output.solutions:
        print(
            f"  trajectory {solution.index:>4}  steps [{solution.first_step}, "
            f"{solution.last_step}]  points={len(solution)}"
        )

    for name, summary in output.extra_summaries.items():
        print("\n" + "-" * 70)
        print(f"EXTRA MODE: {name}")
        print("-" * 70)
        for key, value in summary.items():
            print(f"  {key}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    args = get_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.config)
    if not path.exists():
        print(f"Error: {path} not found")
        return 1

    inp = SolveModesInput.from_json(path)
    if args.model:
        inp.model = args.model

    output = solve_modes(inp)
    print_summary(output)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(output.to_dict(), f, indent=2)
        print(f"\nWrote {args.output}")

    if args.viz or args.save_viz:
        from tools.common.plot import plot_modes

        extra = [c for contours in output.extra_contours.values() for c in contours]
        plot_modes(
            output.contours + extra,
            output.solutions,
            reference_curves=output.reference_curves,
            title=output.model,
            save_path=args.save_viz,
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
