from __future__ import annotations
from typing import List, Sequence, Tuple

from .models import DriveInfo, ScanResult
from .utils import display_path, format_bytes, format_size


def ranked_rows(result: ScanResult) -> List[Tuple[str, str, str]]:
    """(path, formatted size, unit) per top file, largest first."""
    rows = []
    for obs in result.top_files:
        value, unit = format_size(obs.size)
        text = f"{int(value)}" if unit == "bytes" else f"{value:.2f}"
        rows.append((obs.path, text, unit))
    return rows


def render_report(result: ScanResult, top_n: int, verbose: bool = False) -> List[str]:
    lines = [f"Top {top_n} Largest Files:"]
    for path, size, unit in ranked_rows(result):
        lines.append(f"{display_path(path)}: {size} {unit}")

    lines.append("")
    lines.append("Summary:")
    lines.append(f"Total files found: {result.files}")
    lines.append(f"Total directories traversed: {result.dirs}")
    lines.append(f"Errors: {result.error_count}")
    if result.cancelled:
        lines.append("Scan cancelled, results are partial.")

    if verbose and result.errors:
        lines.append("")
        lines.append(f"Skipped {result.error_count} entries due to access errors:")
        for err in result.errors:
            detail = f" ({display_path(err.message)})" if err.message else ""
            lines.append(f"  [{err.kind.value}] {display_path(err.path)}{detail}")

    lines.append(f"duration: {result.elapsed_sec:.6f} s")
    return lines


def render_drives(drives: Sequence[DriveInfo]) -> List[str]:
    lines = [f"{'Mountpoint':<24} {'Type':<8} {'Total':>12} {'Used':>12} {'Free':>12}"]
    for d in drives:
        lines.append(f"{d.mountpoint:<24} {d.fstype:<8} {format_bytes(d.total):>12} "
                     f"{format_bytes(d.used):>12} {format_bytes(d.free):>12}")
    return lines
