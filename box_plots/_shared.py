"""Helpers shared by the box plot case modules."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Sequence

from config import DEFAULT_RANDOM_STATE
from core.shared_utils import samples_to_frame, save_dataframe, write_case_metadata

from .settings import CaseConfig

PACKAGE_NAME = "box_plots"


def persist_case_outputs(
    *,
    case_config: CaseConfig,
    case_output_dir: Path,
    samples: Mapping[str, Sequence[float]],
    figure_path: Path,
    trace_count: int,
    extras: Mapping[str, object] | None = None,
) -> Path:
    """Save the plotted samples and the case descriptor; return the metadata path."""

    samples_path = save_dataframe(
        samples_to_frame(samples),
        case_output_dir,
        f"{case_config.case_id}_samples.csv",
    )
    print(f"Plotted samples saved to: {samples_path}")

    metadata_path = write_case_metadata(
        case_dir=case_output_dir,
        case_id=case_config.case_id,
        case_name=case_config.name,
        package=PACKAGE_NAME,
        features=list(samples.keys()),
        trace_count=trace_count,
        figures=[figure_path],
        extras=dict(extras or {}),
    )
    print(f"Metadata written to: {metadata_path}")
    return metadata_path


def parse_case_args(
    description: str,
    *,
    with_sample_size: bool = True,
    with_random_state: bool = True,
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    if with_sample_size:
        parser.add_argument(
            "--sample-size",
            type=int,
            default=None,
            help="Number of draws per sample (default: case setting).",
        )
    if with_random_state:
        parser.add_argument(
            "--random-state",
            type=int,
            default=DEFAULT_RANDOM_STATE,
            help="Seed for the random generator (default: %(default)s).",
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
    kwargs: dict[str, object] = {
        "output_root": args.output_root,
        "show_plots": args.show_plots,
    }
    if getattr(args, "random_state", None) is not None:
        kwargs["random_state"] = args.random_state
    if getattr(args, "sample_size", None) is not None:
        kwargs["sample_size"] = args.sample_size
    return kwargs
