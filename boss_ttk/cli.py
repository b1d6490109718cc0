from __future__ import annotations
import argparse, logging, os, sys
from typing import Any, Dict, List

from .config import ConfigError, load_configs, env_overrides, apply_cli_overrides
from .data.loadouts import RACE_LOADOUTS, REDUCTION_LOADOUTS
from .reports.ttk_report import ScenarioStats, build_run_report, summarize
from .sampler import EntropyError, Sampler
from .simulators.trials import SimConfig, run_scenarios

logger = logging.getLogger("boss_ttk.cli")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m boss_ttk.cli",
        description="Monte Carlo boss time-to-kill simulator"
    )
    sub = p.add_subparsers(dest="cmd")

    # run
    rn = sub.add_parser("run", help="Simulate every spec scenario and print TTK statistics")
    rn.add_argument("--trials", type=int, default=None, help="Trials per scenario")
    rn.add_argument("--specs", type=int, nargs="+", default=None, help="Defence-drain spec counts to simulate")
    rn.add_argument("--seed", type=int, default=None, help="Seed (default: fresh from the OS)")
    rn.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON config files (merged)")
    rn.add_argument("--env-prefix", type=str, default="BOSS_TTK__", help="Env prefix for overrides")
    rn.add_argument("--report", type=str, default=None, help="Path to save report (.json or .md)")
    rn.add_argument("--print-md", action="store_true", help="Print Markdown report to stdout")
    rn.add_argument("--log-level", type=str, default=os.environ.get("BOSS_TTK_LOG", "WARNING"))

    # loadouts
    sub.add_parser("loadouts", help="List the named attacker loadouts")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _build_config(args: argparse.Namespace) -> SimConfig:
    """Layer defaults, config files, env overrides and flags, in that order."""
    cfg = load_configs(args.config)
    cfg = apply_cli_overrides(cfg, env_overrides(args.env_prefix))
    cfg = apply_cli_overrides(cfg, {"trials": args.trials, "specs": args.specs, "seed": args.seed})
    try:
        return SimConfig.from_query(cfg)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


def _run(args: argparse.Namespace) -> List[ScenarioStats]:
    cfg = _build_config(args)
    sampler = Sampler(cfg.seed) if cfg.seed is not None else Sampler.from_entropy()
    logger.info("seed %d", sampler.seed)
    print(f"Seed: {sampler.seed}")

    stats: List[ScenarioStats] = []
    for result in run_scenarios(cfg, sampler):
        s = summarize(result)
        for line in s.to_lines():
            print(line)
        stats.append(s)

    if args.report or args.print_md:
        report = build_run_report(seed=sampler.seed, trials=cfg.trials, config=cfg.to_dict(), scenarios=stats)
        if args.report:
            if args.report.endswith(".json"):
                with open(args.report, "w", encoding="utf-8") as f:
                    f.write(report.to_json())
            elif args.report.endswith(".md"):
                with open(args.report, "w", encoding="utf-8") as f:
                    f.write(report.to_markdown())
            else:
                print("Report path must end with .json or .md", file=sys.stderr)
        if args.print_md:
            print(report.to_markdown())
    return stats


def _print_loadouts() -> None:
    groups: Dict[str, Dict[str, Dict[str, Any]]] = {
        "reduction": REDUCTION_LOADOUTS,
        "race": RACE_LOADOUTS,
    }
    for role, presets in groups.items():
        print(f"{role}:")
        for name, stats in presets.items():
            print(f"  {name}: accuracy={stats['max_accuracy_roll']} "
                  f"max_hit={stats['max_damage_roll']} interval={stats['attack_interval']}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.cmd == "run":
        logging.basicConfig(
            level=args.log_level.upper(),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        try:
            _run(args)
        except ConfigError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        except EntropyError as e:
            logger.error("cannot seed simulator: %s", e)
            return 1
        return 0

    if args.cmd == "loadouts":
        _print_loadouts()
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
