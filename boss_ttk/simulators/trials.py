"""Monte Carlo driver: repeat drain-then-race trials for each spec count."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

from ..config import ConfigError
from ..data.loadouts import (
    BOSS_PROFILE,
    DEFAULT_RACE_LOADOUT,
    DEFAULT_REDUCTION_LOADOUT,
    DEFAULT_SPECS,
    DEFAULT_TRIALS,
    RACE_DEFENSE_STAT,
    RACE_LOADOUTS,
    REDUCTION_LOADOUTS,
)
from ..entities import Attacker, Defender
from ..sampler import Sampler
from .combat import attack_until_dead, drain_defense

logger = logging.getLogger(__name__)

_ATTACKER_FIELDS = ("max_accuracy_roll", "max_damage_roll", "attack_interval")
_BOSS_FIELDS = ("hit_points", "defense_level", "defense_stat", "min_defense_level")


@dataclass
class SimConfig:
    reduction_attacker: Attacker
    race_attacker: Attacker
    boss: Defender
    race_defense_stat: int = RACE_DEFENSE_STAT
    trials: int = DEFAULT_TRIALS
    specs: Tuple[int, ...] = DEFAULT_SPECS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.trials <= 0:
            raise ValueError("trials must be > 0")
        if any(k < 0 for k in self.specs):
            raise ValueError("spec counts must be >= 0")
        if self.race_defense_stat < 0:
            raise ValueError("race_defense_stat must be >= 0")

    @classmethod
    def default(cls) -> "SimConfig":
        return cls.from_query({})

    @classmethod
    def from_query(cls, query: Dict[str, Any]) -> "SimConfig":
        boss_query = dict(BOSS_PROFILE)
        boss_query.update(query.get("boss") or {})
        unknown = set(boss_query) - set(_BOSS_FIELDS)
        if unknown:
            raise ConfigError(f"unknown boss fields: {sorted(unknown)}")
        boss = Defender(**{k: int(v) for k, v in boss_query.items()})

        seed = query.get("seed")
        return cls(
            reduction_attacker=_build_attacker(
                query.get("reduction_attacker"), REDUCTION_LOADOUTS, DEFAULT_REDUCTION_LOADOUT
            ),
            race_attacker=_build_attacker(
                query.get("race_attacker"), RACE_LOADOUTS, DEFAULT_RACE_LOADOUT
            ),
            boss=boss,
            race_defense_stat=int(query.get("race_defense_stat", RACE_DEFENSE_STAT)),
            trials=int(query.get("trials", DEFAULT_TRIALS)),
            specs=_parse_specs(query.get("specs", DEFAULT_SPECS)),
            seed=None if seed is None else int(seed),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reduction_attacker": _attacker_dict(self.reduction_attacker),
            "race_attacker": _attacker_dict(self.race_attacker),
            "boss": {k: getattr(self.boss, k) for k in _BOSS_FIELDS},
            "race_defense_stat": self.race_defense_stat,
            "trials": self.trials,
            "specs": list(self.specs),
            "seed": self.seed,
        }


def _build_attacker(side: Optional[Dict[str, Any]], presets: Dict[str, Dict[str, int]], default: str) -> Attacker:
    side = dict(side or {})
    name = str(side.pop("loadout", default))
    if name not in presets:
        raise ConfigError(f"unknown loadout {name!r}; expected one of {sorted(presets)}")
    stats: Dict[str, Any] = dict(presets[name])
    stats.update(side)
    unknown = set(stats) - set(_ATTACKER_FIELDS)
    if unknown:
        raise ConfigError(f"unknown attacker fields: {sorted(unknown)}")
    return Attacker(**{k: int(v) for k, v in stats.items()})


def _parse_specs(raw: Any) -> Tuple[int, ...]:
    # Env overrides arrive as "0,1,2" or a bare int
    if isinstance(raw, str):
        return tuple(int(k) for k in raw.split(",") if k.strip())
    if isinstance(raw, int):
        return (raw,)
    return tuple(int(k) for k in raw)


def _attacker_dict(attacker: Attacker) -> Dict[str, int]:
    return {k: getattr(attacker, k) for k in _ATTACKER_FIELDS}


@dataclass
class TrialOutcome:
    drain: int
    race_ticks: int
    total_ticks: int

    @property
    def missed(self) -> bool:
        return self.drain == 0


@dataclass
class ScenarioResult:
    """Per-trial total ticks for one spec count, plus the fully-missed subset."""

    specs: int
    times: List[int] = field(default_factory=list)
    misses: List[int] = field(default_factory=list)

    @property
    def trials(self) -> int:
        return len(self.times)


def run_trial(cfg: SimConfig, specs: int, sampler: Sampler) -> TrialOutcome:
    boss = cfg.boss.copy()
    drain = drain_defense(cfg.reduction_attacker, boss, specs, sampler)
    race_boss = boss.with_defense_stat(cfg.race_defense_stat)
    race_ticks = attack_until_dead(cfg.race_attacker, race_boss, sampler)
    # Every spec costs its full attack interval, landed or not.
    total = race_ticks + specs * cfg.reduction_attacker.attack_interval
    return TrialOutcome(drain=drain, race_ticks=race_ticks, total_ticks=total)


def simulate_n(cfg: SimConfig, specs: int, sampler: Sampler, trials: Optional[int] = None) -> ScenarioResult:
    n = cfg.trials if trials is None else trials
    if n <= 0:
        raise ValueError("trials must be > 0")
    logger.info("simulating %d trials with %d specs", n, specs)

    result = ScenarioResult(specs=specs)
    for _ in range(n):
        outcome = run_trial(cfg, specs, sampler)
        result.times.append(outcome.total_ticks)
        if outcome.missed:
            result.misses.append(outcome.total_ticks)

    logger.info("finished %d specs: %d fully missed trials", specs, len(result.misses))
    return result


def run_scenarios(cfg: SimConfig, sampler: Sampler) -> List[ScenarioResult]:
    """Run every configured spec count in order on one continuing stream."""

    return [simulate_n(cfg, specs, sampler) for specs in cfg.specs]


__all__ = [
    "ScenarioResult",
    "SimConfig",
    "TrialOutcome",
    "run_scenarios",
    "run_trial",
    "simulate_n",
]
