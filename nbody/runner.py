#!/usr/bin/env python3
"""
Command-line configuration and headless running.

Parameter sources are applied in order: built-in defaults, --preset, --config,
then individual flags. Every value passes through the same clamping as a slider.
"""
import argparse
import logging
import math
from typing import List, Optional

from .control import ControlSurface
from .integrators import DEFAULT_INTEGRATOR, INTEGRATORS
from .parameters import DEFAULT_PARAMETERS, PARAMETER_RANGES, SimulationParameters
from .presets import load_preset
from .simulation import Simulation

logger = logging.getLogger(__name__)

# flag name -> parameter field
PARAMETER_FLAGS = {
    "--time-speed": "time_speed",
    "--particles": "particle_count",
    "--velocity": "velocity_multiplier",
    "--mass": "base_mass",
    "--softening": "softening",
    "--time-step": "time_step",
    "--central-mass": "central_mass",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solar System Formation Simulator")
    p.add_argument("--preset", type=str, default=None, help="preset name from the presets folder")
    p.add_argument("--config", type=str, default=None, help="JSON parameter file (applied after --preset)")
    for flag, field in PARAMETER_FLAGS.items():
        bounds = PARAMETER_RANGES[field]
        p.add_argument(flag, dest=field, type=int if bounds.integer else float, default=None,
                       help=f"{bounds.label} [{bounds.low:g}, {bounds.high:g}]")
    p.add_argument("--integrator", choices=sorted(INTEGRATORS), default=DEFAULT_INTEGRATOR)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--paused", action="store_true", help="start paused (windowed mode only)")
    p.add_argument("--headless", action="store_true", help="run without a window")
    p.add_argument("--steps", type=int, default=1000, help="ticks to run in headless mode")
    p.add_argument("--report-every", type=int, default=100, help="log energy every N headless ticks")
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.headless and args.paused:
        parser.error("--paused cannot be combined with --headless")
    return args


def parameters_from_args(args: argparse.Namespace) -> SimulationParameters:
    params = DEFAULT_PARAMETERS
    if args.preset:
        params, _ = load_preset(args.preset, base=params)
    if args.config:
        params, _ = load_preset(args.config, base=params)
    for field in PARAMETER_FLAGS.values():
        value = getattr(args, field, None)
        if value is not None:
            params = params.with_value(field, value)
    return params


def build_simulation(args: argparse.Namespace) -> Simulation:
    return Simulation(parameters_from_args(args), seed=args.seed,
                      start_paused=args.paused, integrator=args.integrator)


def run_headless(control: ControlSurface, steps: int, report_every: int = 0) -> float:
    """
    Tick the simulation steps times without rendering and return the relative energy
    drift |E - E0| / |E0| (nan if E0 is zero).
    """
    logger.info("Headless run: %d steps with %s", steps, control.get_parameters().as_dict())
    control.resume()
    e0 = control.get_status(include_energy=True)["energy"]
    for i in range(steps):
        control.tick()
        if report_every and (i + 1) % report_every == 0:
            status = control.get_status(include_energy=True)
            logger.info("step %d t=%.3f bodies=%d energy=%.6e",
                        status["steps"], status["sim_time"], status["bodies"], status["energy"])
    e1 = control.get_status(include_energy=True)["energy"]
    drift = abs(e1 - e0) / abs(e0) if e0 else math.nan
    logger.info("Finished %d steps; relative energy drift %.3e", steps, drift)
    return drift
