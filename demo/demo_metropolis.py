#!/usr/bin/env python3
"""
Demo: Metropolis-Hastings on a foliated 3D triangulation

1. Scatter points on concentric spheres (one sphere per time slice)
2. Delaunay-triangulate and classify (3,1), (2,2), (1,3) cells
3. Take a combinatorial inventory the ergodic moves can rewrite
4. Run Metropolis-Hastings passes and plot the counts

Output: output/demo_metropolis/history.png, output/demo_metropolis/moves.png
"""

from pathlib import Path
import logging

import numpy as np

from cdtsim.core import (
    Metropolis,
    MetropolisConfig,
    SimulationParameters,
    TriangulationHandle,
)
from cdtsim.geometry import (
    LEDGER_EXECUTORS,
    FoliatedTriangulation,
    FoliationError,
    LedgerClassifier,
    SimplexLedger,
)
from cdtsim.viz import plot_move_statistics, plot_state_history, save_figure


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir = Path("output/demo_metropolis")
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("  METROPOLIS-HASTINGS ON A FOLIATED TRIANGULATION")
    print("=" * 60)

    rng = np.random.default_rng(seed=7)

    print("\n1. Triangulating 4 time slices x 40 points...")
    triangulation = FoliatedTriangulation.from_slices(4, 40, rng)
    three_one, two_two, one_three = triangulation.classify_simplices()
    timelike, spacelike = triangulation.classify_edges()
    print(f"   Cells: {triangulation.number_of_cells}")
    print(f"   (3,1): {len(three_one)}  (2,2): {len(two_two)}  (1,3): {len(one_three)}")
    print(f"   Acausal cells: {len(triangulation.acausal_simplices)}")
    print(f"   Timelike edges: {len(timelike)}  Spacelike edges: {spacelike}")

    print("\n2. Taking the combinatorial inventory...")
    try:
        ledger = SimplexLedger.from_triangulation(triangulation)
    except FoliationError as e:
        # Random spheres rarely give a clean foliation; keep the causal part
        print(f"   {e}; seeding from the causal cells instead")
        ledger = SimplexLedger.seeded(
            three_one=len(three_one),
            two_two=len(two_two),
            one_three=len(one_three),
            timelike_edges=len(timelike),
            spacelike_edges=spacelike,
        )
    print(f"   Ledger cells: {ledger.number_of_cells}")

    print("\n3. Running Metropolis-Hastings...")
    parameters = SimulationParameters(
        alpha=0.6,
        k=1.1,
        lambda_=0.1,
        passes=20,
        output_every_n_passes=1,
    )
    engine = Metropolis(
        parameters=parameters,
        classifier=LedgerClassifier(),
        executors=LEDGER_EXECUTORS,
        config=MetropolisConfig(seed=11),
    )
    handle = engine.run(TriangulationHandle(ledger))
    result = handle.get()

    stats = engine.statistics
    print(f"   Final N1_TL={engine.timelike_edges}  N3_31={engine.three_one_simplices}"
          f"  N3_22={engine.two_two_simplices}")
    print(f"   Ledger cells: {result.number_of_cells} (engine: {engine.total_simplices})")
    for label, counts in stats.as_dict().items():
        print(f"   {label}: {counts['successful']} / {counts['attempted']} accepted")

    print("\n4. Plotting...")
    fig, _ = plot_state_history(engine.history)
    save_figure(fig, output_dir / "history.png")
    fig, _ = plot_move_statistics(stats)
    save_figure(fig, output_dir / "moves.png")
    print(f"   Saved to {output_dir}/")


if __name__ == "__main__":
    main()
