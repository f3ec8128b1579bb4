# orbit_probe/main.py
import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from orbit_probe.cli import run_cli
from orbit_probe.config import settings
from orbit_probe.engine.simulation import Simulation
from orbit_probe.simulation.runner import run_simulation

# --- Setup logger ------------------------------------------------------------
log = logging.getLogger("main")


def _jsonable(o: Any):
    # numpy scalars/arrays and enum commands leak into summaries
    if hasattr(o, "tolist"):
        return o.tolist()
    return repr(o)


def write_run_report(report: Dict[str, Any], integrator: str) -> Path:
    """Write `<RUN_ID_PREFIX>_<integrator>_<UTC stamp>.json` under OUTPUT_DIR (output only, never read back)."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(settings.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{settings.RUN_ID_PREFIX}_{integrator}_{stamp}.json"
    path.write_text(json.dumps(report, indent=2, default=_jsonable))
    return path


def print_summary(summary):
    print("\n================ RUN SUMMARY ================\n")
    print(f"Ticks              : {summary['ticks']}")
    print(f"Simulated time (s) : {summary['simulated_seconds']:.1f}")
    for body_id, b in summary["bodies"].items():
        print(f"Body               : {body_id}")
        print(f"Final altitude (m) : {b['final_altitude']:.1f}")
        print(f"Min altitude (m)   : {b['min_altitude']:.1f}")
        print(f"Max speed (m/s)    : {b['max_speed']:.1f}")
        print(f"Thrust ticks       : {b['thrust_ticks']}")
        print(f"Energy drift       : {b['energy_drift']:.3e}")
        print(f"Impact tick        : {b['impact_tick'] if b['impact_tick'] is not None else 'none'}")
        print("-" * 45)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(message)s",
        datefmt="%H:%M:%S"
    )
    try:
        body, schedule, steps, integrator = run_cli()
        log.info("Starting simulation: integrator=%s, steps=%d, dt=%ss", integrator, steps, settings.DT)

        simulation = Simulation.from_settings(bodies=[body], integrator=integrator)
        summary = run_simulation(simulation, steps, schedule)
        print_summary(summary)

        report = write_run_report(
            {
                "meta": {
                    "integrator": integrator,
                    "dt": settings.DT,
                    "steps": steps,
                    "thrust": settings.THRUST,
                    "burns": [dict(b, command=int(b["command"])) for b in schedule.burns],
                    "timestamp_utc": datetime.now(timezone.utc).isoformat(),
                },
                "summary": summary,
            },
            integrator,
        )
        log.info("Saved run report: %s", report)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
