"""Boss TTK: Monte Carlo time-to-kill estimates for a defence-drain then damage-race fight."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "Attacker",
    "Defender",
    "max_defense_roll",
    "Sampler",
    "EntropyError",
    "SimConfig",
    "ScenarioResult",
    "simulate_n",
    "run_scenarios",
    "ScenarioStats",
    "summarize",
    "ConfigError",
    "__version__",
]

_EXPORTS = {
    "Attacker": ("entities", "Attacker"),
    "Defender": ("entities", "Defender"),
    "max_defense_roll": ("entities", "max_defense_roll"),
    "Sampler": ("sampler", "Sampler"),
    "EntropyError": ("sampler", "EntropyError"),
    "SimConfig": ("simulators.trials", "SimConfig"),
    "ScenarioResult": ("simulators.trials", "ScenarioResult"),
    "simulate_n": ("simulators.trials", "simulate_n"),
    "run_scenarios": ("simulators.trials", "run_scenarios"),
    "ScenarioStats": ("reports.ttk_report", "ScenarioStats"),
    "summarize": ("reports.ttk_report", "summarize"),
    "ConfigError": ("config", "ConfigError"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
