import json
import math

import pytest

from boss_ttk.reports.ttk_report import build_run_report, summarize
from boss_ttk.sampler import Sampler
from boss_ttk.simulators.trials import ScenarioResult, SimConfig, simulate_n


def test_summary_figures():
    stats = summarize(ScenarioResult(specs=1, times=[10, 10, 10, 20], misses=[20]))
    assert stats.mean_ttk == pytest.approx(7.5)
    assert stats.miss_pct == 25
    assert stats.missed_mean_ttk == pytest.approx(12.0)
    assert stats.slow_threshold == pytest.approx(12.5 * 1.31 * 0.6)
    assert stats.slow_pct == 25


def test_percentages_truncate():
    stats = summarize(ScenarioResult(specs=0, times=[5, 5, 5], misses=[5]))
    assert stats.miss_pct == 33


def test_slow_cutoff_uses_truncated_threshold():
    # mean 13.25 -> threshold 17.3575, so a 17 tick trial counts as slow
    stats = summarize(ScenarioResult(specs=0, times=[12, 12, 12, 17]))
    assert stats.slow_pct == 25


def test_no_misses_is_nan_not_an_error():
    stats = summarize(ScenarioResult(specs=2, times=[10, 15], misses=[]))
    assert math.isnan(stats.missed_mean_ttk)
    lines = stats.to_lines()
    assert lines[0] == "TTK with 2 specs: 7.5000"
    assert lines[1] == "  miss %: 0, TTK: nan"


def test_empty_scenario_rejected():
    with pytest.raises(ValueError):
        summarize(ScenarioResult(specs=0))


def test_percentages_bounded_for_real_runs():
    cfg = SimConfig.from_query({"trials": 300})
    sampler = Sampler(77)
    for specs in (0, 1, 2):
        stats = summarize(simulate_n(cfg, specs, sampler))
        assert 0 <= stats.miss_pct <= 100
        assert 0 <= stats.slow_pct <= 100
        assert stats.slow_threshold == pytest.approx(stats.mean_ttk * 1.31)


def test_run_report_serializes_nan_as_null():
    stats = [
        summarize(ScenarioResult(specs=0, times=[10, 20], misses=[10, 20])),
        summarize(ScenarioResult(specs=1, times=[10, 20], misses=[])),
    ]
    report = build_run_report(seed=4, trials=2, config={"trials": 2}, scenarios=stats)
    data = json.loads(report.to_json())
    assert data["seed"] == 4
    assert data["scenarios"][0]["missed_mean_ttk"] == pytest.approx(9.0)
    assert data["scenarios"][1]["missed_mean_ttk"] is None
    md = report.to_markdown()
    assert md.startswith("# Boss TTK Report")
    assert "| 1 | 9.0000 | 0 | nan |" in md
