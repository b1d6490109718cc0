"""Attack resolution and the two combat phases of a boss trial.

An attack attempt draws, in this order: the attacker's accuracy roll, the
defender's defence roll, and only on a hit the damage roll.  A miss never
consumes a damage draw.  Both phases below rely on that order so that a run is
reproducible from a single seed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..entities import Attacker, Defender
from ..sampler import Sampler


@dataclass
class AttackRoll:
    accuracy_roll: int
    defense_roll: int
    damage: int = 0

    @property
    def hit(self) -> bool:
        return self.accuracy_roll > self.defense_roll


def accuracy_check(attacker: Attacker, defender: Defender, sampler: Sampler) -> AttackRoll:
    """Roll accuracy against defence; a tie is a miss."""

    accuracy = sampler.below(attacker.max_accuracy_roll)
    defense = sampler.below(defender.max_defense_roll)
    return AttackRoll(accuracy_roll=accuracy, defense_roll=defense)


def roll_damage(attacker: Attacker, sampler: Sampler) -> int:
    return sampler.below(attacker.max_damage_roll)


def resolve_attack(attacker: Attacker, defender: Defender, sampler: Sampler) -> AttackRoll:
    roll = accuracy_check(attacker, defender, sampler)
    if roll.hit:
        roll.damage = roll_damage(attacker, sampler)
    return roll


def drain_defense(
    attacker: Attacker,
    defender: Defender,
    attempts: int,
    sampler: Sampler,
    trace: Optional[List[Dict[str, Any]]] = None,
) -> int:
    """Make exactly ``attempts`` defence-draining attacks on ``defender``.

    Each landed hit lowers the defence level and hit points by the same
    damage roll.  The phase never stops early.  Returns the summed damage,
    so 0 means every attempt missed (or rolled zero).
    """

    drained = 0
    for attempt in range(attempts):
        roll = resolve_attack(attacker, defender, sampler)
        if roll.hit:
            defender.reduce_defense(roll.damage)
            drained += roll.damage
        if trace is not None:
            trace.append(
                {
                    "attempt": attempt,
                    "accuracy_roll": roll.accuracy_roll,
                    "defense_roll": roll.defense_roll,
                    "hit": roll.hit,
                    "damage": roll.damage,
                    "defense_level": defender.defense_level,
                    "hit_points": defender.hit_points,
                }
            )
    return drained


def attack_until_dead(attacker: Attacker, defender: Defender, sampler: Sampler) -> int:
    """Attack until ``defender`` has no hit points left; returns elapsed ticks.

    Every attempt costs ``attacker.attack_interval`` ticks, hit or miss.  The
    caller must supply ``max_damage_roll >= 1`` (and a non-zero accuracy
    bound) whenever the defender has hit points, otherwise this never returns.
    """

    ticks = 0
    while defender.alive():
        ticks += attacker.attack_interval
        roll = resolve_attack(attacker, defender, sampler)
        if roll.hit:
            defender.hit(roll.damage)
    return ticks


__all__ = [
    "AttackRoll",
    "accuracy_check",
    "attack_until_dead",
    "drain_defense",
    "resolve_attack",
    "roll_damage",
]
