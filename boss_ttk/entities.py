"""Combat stats for the player and the boss."""
from __future__ import annotations

from dataclasses import dataclass

# Defensive bonus equivalent folded into every defence roll.
DEFENSIVE_RATING = 400


def max_defense_roll(defense_level: int, defense_stat: int) -> int:
    """Upper bound of the boss's defence roll for a level/stat pair."""

    base = (defense_level + 9) * (defense_stat + 64)
    return base * (DEFENSIVE_RATING * 4 + 1000) // 1000


@dataclass(frozen=True)
class Attacker:
    """A gear/stat loadout; never mutated during a run."""

    max_accuracy_roll: int
    max_damage_roll: int
    attack_interval: int

    def __post_init__(self) -> None:
        if self.max_accuracy_roll < 0:
            raise ValueError("max_accuracy_roll must be >= 0")
        if self.max_damage_roll < 0:
            raise ValueError("max_damage_roll must be >= 0")
        if self.attack_interval <= 0:
            raise ValueError("attack_interval must be > 0")


@dataclass
class Defender:
    """Runtime state of the boss within one trial."""

    hit_points: int
    defense_level: int
    defense_stat: int
    min_defense_level: int

    def __post_init__(self) -> None:
        if self.hit_points < 0:
            raise ValueError("hit_points must be >= 0")
        if self.defense_stat < 0:
            raise ValueError("defense_stat must be >= 0")
        if self.min_defense_level < 0:
            raise ValueError("min_defense_level must be >= 0")
        if self.defense_level < self.min_defense_level:
            raise ValueError("defense_level must be >= min_defense_level")

    @property
    def max_defense_roll(self) -> int:
        return max_defense_roll(self.defense_level, self.defense_stat)

    def alive(self) -> bool:
        return self.hit_points > 0

    def hit(self, damage: int) -> None:
        self.hit_points = max(0, self.hit_points - damage)

    def reduce_defense(self, amount: int) -> None:
        """Drain defence by ``amount`` (clamped at the floor) and take it as damage."""

        headroom = self.defense_level - self.min_defense_level
        self.defense_level -= min(amount, headroom)
        self.hit(amount)

    def copy(self) -> "Defender":
        return Defender(
            hit_points=self.hit_points,
            defense_level=self.defense_level,
            defense_stat=self.defense_stat,
            min_defense_level=self.min_defense_level,
        )

    def with_defense_stat(self, defense_stat: int) -> "Defender":
        """Same boss state seen through a different attack style's defence."""

        return Defender(
            hit_points=self.hit_points,
            defense_level=self.defense_level,
            defense_stat=defense_stat,
            min_defense_level=self.min_defense_level,
        )


__all__ = ["Attacker", "DEFENSIVE_RATING", "Defender", "max_defense_roll"]
