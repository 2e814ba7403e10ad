"""Helpers shared by the feature selection case modules."""

from __future__ import annotations

import argparse
from typing import Sequence

from config import DEFAULT_RANDOM_STATE

from .settings import DEFAULT_N_RESAMPLING


def normalize_conditionings(conditionings: Sequence[float]) -> list[float]:
    values: list[float] = []
    for value in conditionings:
        conditioning = float(value)
        if not 0 < conditioning <= 1:
            raise ValueError(f"conditioning must be in (0, 1], got {value!r}")
        if conditioning not in values:
            values.append(conditioning)
    if not values:
        raise ValueError("At least one conditioning value is required.")
    return values


def parse_case_args(description: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--conditionings",
        nargs="*",
        type=float,
        default=None,
        help="Within-block conditioning values (default: 1 and 1e-4).",
    )
    parser.add_argument(
        "--n-resampling",
        type=int,
        default=DEFAULT_N_RESAMPLING,
        help="Randomized Lasso resamplings (default: %(default)s).",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=DEFAULT_RANDOM_STATE,
        help="Seed for the resampling (default: %(default)s).",
    )
    parser.add_argument(
        "--output-root",
        default=None,
        help="Optional custom output directory root.",
    )
    parser.add_argument(
        "--show-plots",
        action="store_true",
        help="Display plots interactively while generating them.",
    )
    return parser.parse_args()


def case_kwargs(args: argparse.Namespace) -> dict[str, object]:
    return {
        "conditionings": args.conditionings,
        "n_resampling": args.n_resampling,
        "random_state": args.random_state,
        "output_root": args.output_root,
        "show_plots": args.show_plots,
    }
