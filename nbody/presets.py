#!/usr/bin/env python3
"""
Parameter preset loading.

A preset is a JSON file in the presets/ folder next to this module (or any path
given explicitly, e.g. from --config):

{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "parameters": {
    "time_speed": 1.0,
    "particle_count": 100,
    "velocity_multiplier": 1.0,
    "base_mass": 3.0,
    "softening": 1.0,
    "time_step": 0.01,
    "central_mass": 1000.0
  }
}

Missing parameters keep the value of the base parameter set; every value goes
through the same clamping as a slider change. Users can drop their own JSON files
into the folder and they'll be picked up by list_presets().
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from .parameters import SimulationParameters

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(__file__), "presets")


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as e:
    logger.warning("Could not read preset %s: %s", path, e)
    return None
  if not isinstance(data, dict):
    logger.warning("Preset %s is not a JSON object", path)
    return None
  return data


def _resolve(name_or_path: str, presets_dir: str) -> str:
  if os.path.isfile(name_or_path):
    return name_or_path
  fn = name_or_path if name_or_path.lower().endswith(".json") else name_or_path + ".json"
  return os.path.join(presets_dir, fn)


def list_presets(presets_dir: str = PRESETS_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for readable presets."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(presets_dir):
    return items
  for fn in sorted(os.listdir(presets_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(presets_dir, fn))
    if data is None:
      continue
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def parameters_from_data(data: Dict[str, Any], base: Optional[SimulationParameters] = None) -> SimulationParameters:
  """Accept either a full preset object or a bare {parameter: value} mapping."""
  raw = data.get("parameters", data)
  if not isinstance(raw, dict):
    raise ValueError("'parameters' must be a JSON object")
  raw = {k: v for k, v in raw.items() if k not in ("name", "description")}
  return SimulationParameters.from_dict(raw, base=base)


def load_preset(name_or_path: str, base: Optional[SimulationParameters] = None,
                presets_dir: str = PRESETS_DIR) -> Tuple[SimulationParameters, str]:
  """
  Load a preset by file name (with or without .json) or by path.
  Returns (parameters, display_name).

  Raises FileNotFoundError if the preset does not exist and ValueError if it cannot
  be parsed.
  """
  path = _resolve(name_or_path, presets_dir)
  if not os.path.isfile(path):
    raise FileNotFoundError(f"No such preset: {name_or_path}")
  data = _read_json(path)
  if data is None:
    raise ValueError(f"Preset is not valid JSON: {path}")
  display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
  params = parameters_from_data(data, base=base)
  logger.info("Loaded preset %r", display_name)
  return params, display_name
