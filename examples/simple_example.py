"""
Simple example demonstrating the gmodal engine.

This example shows how to:
1. Integrate a single trajectory with RK4
2. Evolve a whole initial curve as a GMA ensemble
3. Extract contours and solutions
4. Limit the domain and inspect truncated trajectories
"""

import math

import numpy as np

import gmodal as gm


def harmonic(t, pt):
    return [pt[1], -pt[0]]


def main():
    print("=" * 80)
    print("gmodal: Generalized Modal Analysis")
    print("=" * 80)
    print()

    # ===================================================================
    # 1. A single trajectory
    # ===================================================================
    print("1. Integrating one trajectory of the harmonic oscillator...")
    print()

    ode = gm.RK4Integrator(harmonic)
    times, points = ode.solve(100, 0.01, 0.0, [1.0, 0.0])
    exact = np.array([math.cos(1.0), -math.sin(1.0)])
    print(f"   t = {times[-1]:.2f}, x = {points[-1]}, error = {np.abs(points[-1] - exact).max():.2e}")
    print()

    # ===================================================================
    # 2. An ensemble from a circle of initial points
    # ===================================================================
    print("2. Evolving a circle of 24 initial points...")
    print()

    circle = gm.linspace(0.0, 2 * math.pi, 24, gm.ellipse(1.0, 1.0, 0.0))
    mode = gm.GMAMode(harmonic, circle, t0=0.0, dt=0.05, steps=120)
    print(f"   {mode}")
    print()

    # ===================================================================
    # 3. Contours and solutions
    # ===================================================================
    print("3. Extracting 6 contours and 4 solutions...")
    print()

    contours = mode.get_contours(gm.SamplingOptions(sample_count=6))
    for contour in contours:
        print(f"   contour at step {contour.step:>3}: {len(contour)} points, t = {contour.parameter[0]:.2f}")
    print()

    solutions = mode.get_solutions(gm.SamplingOptions(sample_count=4))
    for solution in solutions:
        print(f"   solution {solution.index:>2}: steps [{solution.first_step}, {solution.last_step}], {len(solution)} points")
    print()

    # ===================================================================
    # 4. A limited, backward-growing ensemble
    # ===================================================================
    print("4. Saddle integrated backward inside a box...")
    print()

    def saddle(t, pt):
        return [pt[0], -pt[1]]

    limited = gm.GMAMode(saddle, circle, t0=0.0, dt=-0.05, steps=100, limit=gm.BoxLimit(3.0))
    summary = gm.summarize_ensemble(limited)
    for key, value in summary.items():
        print(f"   {key}: {value}")
    print()
    print(f"   step at t=-2.5: {limited.get_step_for_time(-2.5)}")
    print(f"   truncated trajectories: {gm.truncated_trajectories(limited)}")


if __name__ == "__main__":
    main()
