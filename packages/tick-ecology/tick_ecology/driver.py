"""Command-line driver - populate a field and watch the species compete.

Run: python -m tick_ecology.driver --steps 500 --seed 42
"""
from __future__ import annotations

import argparse
from typing import Sequence

from tick_ecology.config import DEFAULT_DEPTH, DEFAULT_WIDTH
from tick_ecology.simulator import Simulator


def print_report(sim: Simulator) -> None:
    print(f"[step {sim.step_number:>4}]  {sim.census().details()}")


def print_summary(sim: Simulator) -> None:
    chronicle = sim.chronicle
    births = sum(chronicle.totals("birth").values())
    deaths = sum(chronicle.totals("death").values())
    print(f"\n=== SIMULATION SUMMARY (step {sim.step_number}, seed {sim.seed}) ===")
    print(f"  Total births:  {births}")
    print(f"  Total deaths:  {deaths}")
    for cause, n in sorted(chronicle.causes().items()):
        print(f"    {cause:<14}{n}")
    print(f"  Survivors:     {sim.census().details() or 'none'}")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Predator-prey simulation on a grid")
    parser.add_argument("--steps", "-n", type=int, default=100,
                        help="number of steps to simulate (default: 100)")
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH,
                        help=f"field rows (default: {DEFAULT_DEPTH})")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                        help=f"field columns (default: {DEFAULT_WIDTH})")
    parser.add_argument("--seed", "-s", type=int, default=42,
                        help="RNG seed (default: 42)")
    parser.add_argument("--every", type=int, default=10,
                        help="print a census every N steps (default: 10)")
    parser.add_argument("--headless", action="store_true",
                        help="suppress per-step output; print summary at end")
    args = parser.parse_args(argv)

    sim = Simulator(depth=args.depth, width=args.width, seed=args.seed)
    sim.reset()

    if not args.headless:
        print(f"=== Predator-prey (seed={args.seed}, {args.depth}x{args.width}, "
              f"steps={args.steps}) ===")
        print_report(sim)
        every = max(args.every, 1)

        def report(s: Simulator) -> None:
            if s.step_number % every == 0:
                print_report(s)

        sim.on_step(report)

    try:
        sim.run(args.steps)
    except KeyboardInterrupt:
        print(f"\n\nStopped at step {sim.step_number}.")

    print_summary(sim)


if __name__ == "__main__":
    main()
