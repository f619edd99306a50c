from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from schedulelab.config import (
    DEFAULT_ITERATIONS,
    DEFAULT_WORKERS,
    REPRESENTATIVE_PERCENTILES,
    SimulationSettings,
)
from schedulelab.io import (
    read_project_json,
    write_runs_csv,
    write_schedule_csv,
    write_summary_json,
)
from schedulelab.metrics import representative_run
from schedulelab.model import ProjectFormatError
from schedulelab.sim import run_simulation
from schedulelab.validate import ProjectValidationError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="schedulelab", description="Monte Carlo project schedule simulator"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sim = sub.add_parser("simulate", help="Run simulations for a project")
    sim.add_argument("--project", required=True, type=Path)
    sim.add_argument("--runs", type=int, default=DEFAULT_ITERATIONS)
    sim.add_argument("--seed", type=int, default=None)
    sim.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Number of worker threads (results do not depend on this)",
    )
    sim.add_argument("--out-summary", required=True, type=Path)
    sim.add_argument("--out-runs", required=False, type=Path)
    sim.add_argument(
        "--out-schedule",
        required=False,
        type=Path,
        help="Per-task schedule of one representative run",
    )
    sim.add_argument(
        "--schedule-run",
        choices=sorted(REPRESENTATIVE_PERCENTILES),
        default="median",
        help="Which run --out-schedule exports, by duration rank",
    )
    sim.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    if args.cmd == "simulate":
        logging.basicConfig(
            level=args.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        try:
            settings = SimulationSettings(
                iterations=args.runs, seed=args.seed, workers=args.workers
            )
            project = read_project_json(args.project)
            runs, stats = run_simulation(
                project,
                settings.iterations,
                seed=settings.seed,
                workers=settings.workers,
            )
        except (ProjectFormatError, ProjectValidationError) as e:
            sys.stderr.write(f"schedulelab: invalid project: {e}\n")
            return 2

        write_summary_json(
            args.out_summary,
            stats,
            extra={"project": project.name, "runs_requested": settings.iterations},
        )
        if args.out_runs:
            write_runs_csv(args.out_runs, runs, project=project)
        if args.out_schedule:
            run = representative_run(
                runs, REPRESENTATIVE_PERCENTILES[args.schedule_run]
            )
            if run is not None:
                write_schedule_csv(args.out_schedule, run, project=project)
                logger.info("Exported schedule of run %d", run.run_id)

        return 0

    raise AssertionError(f"Unhandled command: {args.cmd}")
