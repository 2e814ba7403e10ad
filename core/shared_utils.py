"""Shared helpers for gallery case studies."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import json
import re
from datetime import datetime, timezone

import pandas as pd

_FILENAME_PATTERN = re.compile(r"[^\w.-]+")


def resolve_output_dir(
    case_id: str,
    default_output_root: Path,
    output_root: Path | str | None,
) -> Path:
    root = Path(output_root) if output_root is not None else default_output_root
    case_dir = root / case_id
    case_dir.mkdir(parents=True, exist_ok=True)
    return case_dir


def sanitize_filename(label: str, suffix: str = "", extension: str = "png") -> str:
    base = _FILENAME_PATTERN.sub("_", label.strip().lower())
    base = base.strip("._") or "plot"
    suffix = suffix.strip("._")
    if suffix:
        return f"{base}_{suffix}.{extension}"
    return f"{base}.{extension}"


DEFAULT_CSV_KWARGS = {"index": False, "sep": ",", "decimal": "."}


def save_dataframe(
    df: pd.DataFrame,
    output_dir: Path,
    filename: str,
    *,
    csv_kwargs: Mapping[str, Any] | None = None,
) -> Path:
    output_path = output_dir / filename
    options = dict(DEFAULT_CSV_KWARGS)
    if csv_kwargs is not None:
        options.update(csv_kwargs)
    df.to_csv(output_path, **options)
    return output_path


def samples_to_frame(samples: Mapping[str, Sequence[float]]) -> pd.DataFrame:
    """Stack named sample vectors into a long ``trace``/``value`` frame."""

    records = [
        {"trace": name, "value": float(value)}
        for name, values in samples.items()
        for value in values
    ]
    return pd.DataFrame(records, columns=["trace", "value"])


def write_case_metadata(
    *,
    case_dir: Path,
    case_id: str,
    case_name: str,
    package: str,
    features: Any,
    trace_count: int,
    figures: Sequence[Path | str] = (),
    extras: Mapping[str, Any] | None = None,
    filename: str = 'meta.json',
) -> Path:
    """Persist a metadata descriptor for a case workflow."""

    case_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).isoformat()

    digits = ''.join(ch for ch in case_id if ch.isdigit())
    payload: dict[str, Any] = {
        'case_id': case_id,
        'case_name': case_name,
        'package': package,
        'features': features,
        'trace_count': int(trace_count),
        'figures': [str(path) for path in figures],
        'executed_at': timestamp,
        'metadata_generated_at': timestamp,
    }
    if digits:
        payload['case_number'] = int(digits)
    if extras:
        payload.update(extras)

    output_path = case_dir / filename
    with output_path.open('w', encoding='utf-8') as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")
    return output_path


def read_case_metadata(case_dir: Path | str, filename: str = "meta.json") -> dict[str, Any]:
    path = Path(case_dir) / filename
    if not path.exists():
        raise FileNotFoundError(f"Case metadata not found at {path}. Run the case first.")
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)
