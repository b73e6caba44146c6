"""
Build settings merge.

Each key carries one policy:

- Replace: always set to the canonical list
- DefaultIfAbsent: set only when the key holds no value yet
- Scalar: always set to a single literal

The merge works on anything supporting ``in``, ``[]`` and ``[]=``, which
covers plain dicts and pbxproj's buildSettings objects alike.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .model import ProjectModel

logger = logging.getLogger(__name__)

INHERITED = "$(inherited)"


@dataclass(frozen=True)
class Replace:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class DefaultIfAbsent:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class Scalar:
    value: str


SettingPolicy = Union[Replace, DefaultIfAbsent, Scalar]


def inherited_list(*values: str) -> Tuple[str, ...]:
    """Search path style list that starts from the outer scope's value."""
    return (INHERITED,) + tuple(values)


def _current(settings, key: str):
    return settings[key] if key in settings else None


def apply_setting(settings, key: str, policy: SettingPolicy) -> bool:
    """Apply one policy to one key. Returns True when the value was written."""
    if isinstance(policy, Replace):
        settings[key] = list(policy.values)
        return True
    if isinstance(policy, Scalar):
        settings[key] = policy.value
        return True
    if isinstance(policy, DefaultIfAbsent):
        if _current(settings, key) is not None:
            return False
        settings[key] = list(policy.values)
        return True
    raise TypeError(f"Unknown setting policy for {key}: {policy!r}")


def apply_settings(settings, updates: Dict[str, SettingPolicy]) -> List[str]:
    """
    Apply every policy in updates to one configuration's settings.

    Returns:
        Keys that were written
    """
    return [key for key, policy in updates.items() if apply_setting(settings, key, policy)]


def merge_target_settings(
    model: ProjectModel,
    target,
    updates: Dict[str, SettingPolicy],
) -> Dict[str, List[str]]:
    """
    Apply updates to every build configuration of target.

    Returns:
        Configuration name -> keys written
    """
    results = {}
    for configuration in model.configurations(target):
        name = str(getattr(configuration, "name", configuration.get_id()))
        written = apply_settings(model.build_settings(configuration), updates)
        results[name] = written
        logger.info(f"Updated {len(written)} settings on {target.name}/{name}")
    return results
