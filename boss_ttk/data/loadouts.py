"""Named attacker loadouts and the boss profile used by default."""
from __future__ import annotations

# (max_accuracy_roll, max_damage_roll, attack_interval)
REDUCTION_LOADOUTS = {
    "bandos": {"max_accuracy_roll": 36814 * 2, "max_damage_roll": 75, "attack_interval": 6},
    "torva": {"max_accuracy_roll": 36814 * 2, "max_damage_roll": 77, "attack_interval": 6},
}

RACE_LOADOUTS = {
    "arma": {"max_accuracy_roll": 49136, "max_damage_roll": 76, "attack_interval": 5},
    "masori": {"max_accuracy_roll": 53032, "max_damage_roll": 80, "attack_interval": 5},
}

DEFAULT_REDUCTION_LOADOUT = "bandos"
DEFAULT_RACE_LOADOUT = "arma"

BOSS_PROFILE = {
    "hit_points": 571,
    "defense_level": 180,
    "defense_stat": 40,
    "min_defense_level": 120,
}
# Ranged defence of the same boss, used once the drain phase is over.
RACE_DEFENSE_STAT = 20

DEFAULT_SPECS = (0, 1, 2)
DEFAULT_TRIALS = 100_000
