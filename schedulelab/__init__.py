"""Monte Carlo simulation of project completion time and peak resource demand.

The core is headless: it takes a project definition (tasks with three-point
duration estimates, dependencies and optional resource needs) and returns the
per-run results plus summary statistics. Presentation lives elsewhere.

Run from source:

    python -m schedulelab simulate --project plan.json --out-summary summary.json
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
