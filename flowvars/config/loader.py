"""
Read and write closure configurations as YAML.

A configuration file has up to three top-level keys::

    preset: nondimensional        # optional base for the constants
    constants:                    # overrides, nested like PhysicalConstants
      viscosity: {prandtl_lam: 0.7}
    state:
      kind: rans_sst
      n_dim: 2

Unknown keys are ignored so that solver-level files can carry their own
sections next to these.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass

from loguru import logger

from .schema import (
    ClosureConfig, PhysicalConstants, StateConfig, PRESETS,
)


def _overlay(base: dict, extra: dict) -> dict:
    """Return ``base`` with ``extra`` laid over it, section by section."""
    merged = dict(base)
    for key, value in extra.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _overlay(current, value)
        merged[key] = value
    return merged


def _as_field_type(value, field_type):
    """Convert YAML scalars to the numeric type a field declares.

    YAML reads ``1.716e-5`` as a string and ``287`` as an int; both are
    turned into floats for float fields. Values that do not convert are
    passed through and left to the dataclass.
    """
    if isinstance(value, bool) or field_type not in (int, float):
        return value
    if isinstance(value, (str, int)):
        try:
            return field_type(value)
        except ValueError:
            return value
    return value


def _build(cls, data: dict):
    """Instantiate dataclass ``cls`` from a (possibly nested) mapping."""
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if is_dataclass(f.type) and isinstance(value, dict):
            kwargs[f.name] = _build(f.type, value)
        else:
            kwargs[f.name] = _as_field_type(value, f.type)
    return cls(**kwargs)


def _preset_constants(name: str) -> dict:
    if name not in PRESETS:
        raise ValueError(f"Unknown constants preset: {name!r}. "
                         f"Use one of {sorted(PRESETS)}")
    return ClosureConfig(constants=PRESETS[name]()).to_dict()['constants']


def from_dict(data: Dict[str, Any]) -> ClosureConfig:
    """
    Build a ClosureConfig from a parsed YAML mapping.

    Parameters
    ----------
    data : dict
        Mapping with optional ``preset``, ``constants`` and ``state`` keys.
        Missing entries keep their dataclass defaults; explicit
        ``constants`` entries override the preset.

    Returns
    -------
    ClosureConfig

    Raises
    ------
    ValueError
        If the preset is unknown or ``state.n_dim`` is not 2 or 3.
    """
    constants = data.get('constants') or {}
    if data.get('preset'):
        constants = _overlay(_preset_constants(data['preset']), constants)

    config = ClosureConfig(
        constants=_build(PhysicalConstants, constants),
        state=_build(StateConfig, data.get('state') or {}),
    )
    if config.state.n_dim not in (2, 3):
        raise ValueError(f"state.n_dim must be 2 or 3, got {config.state.n_dim}")
    return config


def load_yaml(path: Union[str, Path]) -> ClosureConfig:
    """
    Load a closure configuration file.

    An empty file yields the default configuration.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info(f"Loading closure configuration from: {path}")
    data = yaml.safe_load(path.read_text()) or {}
    return from_dict(data)


def save_yaml(config: ClosureConfig, path: Union[str, Path]) -> None:
    """Write ``config`` so that load_yaml() reproduces it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False))
