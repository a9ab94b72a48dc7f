"""Turn per-length search results into what the user gets to see."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from thaumpath.solver import AspectPaths

SCORE_LINE_TEMPLATE = "\tScore [{price}] [{path}]"


@dataclass(frozen=True)
class SearchReport:
    """Which lengths of a search window are worth showing.

    ``baseline_offset`` is the shortest offset with any path. Other offsets
    priced at or below the baseline are ``alternatives``; pricier ones are
    ``suppressed`` even though they were computed.
    """

    target_length: int
    results: Mapping[int, AspectPaths[Any]]
    baseline_offset: Optional[int]
    alternatives: Tuple[int, ...]
    suppressed: Tuple[int, ...]

    @property
    def found(self) -> bool:
        return self.baseline_offset is not None

    @property
    def baseline(self) -> Optional[AspectPaths[Any]]:
        if self.baseline_offset is None:
            return None
        return self.results[self.baseline_offset]

    @property
    def baseline_length(self) -> Optional[int]:
        if self.baseline_offset is None:
            return None
        return self.target_length + self.baseline_offset

    @property
    def incomplete(self) -> bool:
        return any(not paths.complete for paths in self.results.values())


def summarize(
    results: Mapping[int, AspectPaths[Any]], target_length: int
) -> SearchReport:
    """Apply the reporting policy to the output of ``Solver.find_paths``."""
    found_offsets = sorted(
        offset for offset, paths in results.items() if paths.found
    )
    if not found_offsets:
        return SearchReport(
            target_length=target_length,
            results=dict(results),
            baseline_offset=None,
            alternatives=(),
            suppressed=(),
        )

    baseline_offset = found_offsets[0]
    baseline_price = results[baseline_offset].price
    alternatives: List[int] = []
    suppressed: List[int] = []
    for offset in found_offsets[1:]:
        if results[offset].price <= baseline_price:
            alternatives.append(offset)
        else:
            suppressed.append(offset)

    return SearchReport(
        target_length=target_length,
        results=dict(results),
        baseline_offset=baseline_offset,
        alternatives=tuple(alternatives),
        suppressed=tuple(suppressed),
    )


def format_path(path: Iterable[Any]) -> str:
    return ", ".join(_label(node) for node in path)


def format_score_lines(paths: AspectPaths[Any]) -> List[str]:
    """One ``Score [<price>] [<path>]`` line per cheapest path."""
    return [
        SCORE_LINE_TEMPLATE.format(price=paths.price, path=format_path(path))
        for path in paths.paths
    ]


def render_report(start: Any, end: Any, report: SearchReport) -> List[str]:
    """Render the console lines for a report that found at least one path."""
    baseline = report.baseline
    if baseline is None:
        return []

    lines = [
        f"Paths from {_label(start)} to {_label(end)} "
        f"with length {report.baseline_length}:"
    ]
    lines.extend(format_score_lines(baseline))

    for offset in report.alternatives:
        alternative = report.results[offset]
        lines.append(
            f"Paths from {_label(start)} to {_label(end)} of length "
            f"{report.target_length + offset} cost no more than the "
            f"cheapest path of length {report.baseline_length}:"
        )
        lines.extend(format_score_lines(alternative))

    if report.incomplete:
        lines.append(
            "Some lengths hit the search limit; equally cheap paths or "
            "lengths may be missing."
        )
    return lines


def _label(node: Any) -> str:
    label = getattr(node, "label", None)
    if isinstance(label, str):
        return label
    return str(node)
