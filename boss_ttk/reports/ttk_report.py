from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List
from datetime import datetime, timezone
from statistics import mean
import json
import math

from ..simulators.trials import ScenarioResult

# Game ticks are 0.6 seconds long.
TICK_SECONDS = 0.6
# Trials at or beyond this multiple of the mean count as slow kills.
SLOW_FACTOR = 1.31


@dataclass
class ScenarioStats:
    specs: int
    trials: int
    mean_ttk: float
    miss_pct: int
    missed_mean_ttk: float
    slow_threshold: float
    slow_pct: int

    def to_lines(self) -> List[str]:
        return [
            f"TTK with {self.specs} specs: {self.mean_ttk:.4f}",
            f"  miss %: {self.miss_pct}, TTK: {_fmt(self.missed_mean_ttk)}",
            f"  % slower than {self.slow_threshold:.4f}: {self.slow_pct}",
        ]


def _fmt(value: float) -> str:
    return "nan" if math.isnan(value) else f"{value:.4f}"


def _mean_or_nan(values: List[int]) -> float:
    return float(mean(values)) if values else math.nan


def summarize(result: ScenarioResult, tick_seconds: float = TICK_SECONDS,
              slow_factor: float = SLOW_FACTOR) -> ScenarioStats:
    """Reduce per-trial tick counts to the reported TTK figures (in seconds)."""
    trials = result.trials
    if trials == 0:
        raise ValueError("cannot summarize a scenario with no trials")
    avg_ticks = _mean_or_nan(result.times)
    missed_avg_ticks = _mean_or_nan(result.misses)
    threshold = avg_ticks * slow_factor
    # Tick counts are whole numbers, so compare against the truncated threshold
    cutoff = int(threshold)
    slows = sum(1 for t in result.times if t >= cutoff)
    return ScenarioStats(
        specs=result.specs,
        trials=trials,
        mean_ttk=avg_ticks * tick_seconds,
        miss_pct=len(result.misses) * 100 // trials,
        missed_mean_ttk=missed_avg_ticks * tick_seconds,
        slow_threshold=threshold * tick_seconds,
        slow_pct=slows * 100 // trials,
    )


@dataclass
class RunReport:
    timestamp: str
    seed: int
    trials: int
    config: Dict[str, Any]
    scenarios: List[ScenarioStats]

    def to_json(self) -> str:
        d = asdict(self)
        for sc in d["scenarios"]:
            # NaN is not valid JSON
            if math.isnan(sc["missed_mean_ttk"]):
                sc["missed_mean_ttk"] = None
        return json.dumps(d, indent=2, sort_keys=False)

    def to_markdown(self) -> str:
        lines = []
        lines.append("# Boss TTK Report")
        lines.append(f"- **Timestamp:** {self.timestamp}")
        lines.append(f"- **Seed:** {self.seed}  |  **Trials:** {self.trials}")
        lines.append("\n## Scenarios")
        lines.append("| specs | mean TTK (s) | miss % | missed TTK (s) | slow threshold (s) | slow % |")
        lines.append("|---|---|---|---|---|---|")
        for s in self.scenarios:
            lines.append(
                f"| {s.specs} | {s.mean_ttk:.4f} | {s.miss_pct} | {_fmt(s.missed_mean_ttk)} "
                f"| {s.slow_threshold:.4f} | {s.slow_pct} |"
            )
        lines.append("\n## Config")
        for k, v in self.config.items():
            lines.append(f"- {k}: `{v}`")
        return "\n".join(lines)


def build_run_report(seed: int, trials: int, config: Dict[str, Any],
                     scenarios: List[ScenarioStats]) -> RunReport:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
    return RunReport(
        timestamp=timestamp,
        seed=int(seed),
        trials=int(trials),
        config=dict(config),
        scenarios=list(scenarios),
    )


__all__ = ["RunReport", "ScenarioStats", "SLOW_FACTOR", "TICK_SECONDS", "build_run_report", "summarize"]
