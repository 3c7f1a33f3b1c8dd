from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from club_eligibility.ingest.columns import SMALL_SIDED_PATTERN, CompetitionLayout
from club_eligibility.services.eligibility import RuleThresholds


class SettingsError(Exception):
    """Raised when configuration values are invalid."""


_DEFAULTS: dict[str, object] = {
    "store": {
        "path": "~/.config/club-eligibility/matches.csv",
    },
    "columns": {
        "competition_first": 6,
        "competition_last": 18,
        "excluded_pattern": SMALL_SIDED_PATTERN,
    },
    "rules": {
        "min_matches": 4,
        "max_higher_share": 0.51,
    },
}


@dataclass(frozen=True)
class EligibilitySettings:
    store_path: Path
    layout: CompetitionLayout
    thresholds: RuleThresholds


def create_config(
    yaml_path: str = "eligibility.yaml",
    env_prefix: str = "ELIGIBILITY",
    defaults: dict[str, object] | None = None,
    *,
    store_path: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if store_path is not None:
        layers.insert(0, config_from_dict({"store": {"path": store_path}}))
    return ConfigurationSet(*layers)


def _int(cfg: ConfigurationSet, key: str) -> int:
    raw = cfg[key]
    try:
        return int(str(raw))
    except ValueError:
        raise SettingsError(f"{key}: expected an integer, got {raw!r}") from None


def _float(cfg: ConfigurationSet, key: str) -> float:
    raw = cfg[key]
    try:
        return float(str(raw))
    except ValueError:
        raise SettingsError(f"{key}: expected a number, got {raw!r}") from None


def load_settings(cfg: ConfigurationSet | None = None) -> EligibilitySettings:
    if cfg is None:
        cfg = create_config()

    try:
        layout = CompetitionLayout(
            first_position=_int(cfg, "columns.competition_first"),
            last_position=_int(cfg, "columns.competition_last"),
            excluded_pattern=str(cfg["columns.excluded_pattern"]),
        )
    except (ValueError, re.error) as e:
        raise SettingsError(str(e)) from e

    min_matches = _int(cfg, "rules.min_matches")
    max_higher_share = _float(cfg, "rules.max_higher_share")
    if min_matches < 0:
        raise SettingsError(f"rules.min_matches must be >= 0, got {min_matches}")
    if not 0 < max_higher_share <= 1:
        raise SettingsError(f"rules.max_higher_share must be in (0, 1], got {max_higher_share}")

    return EligibilitySettings(
        store_path=Path(str(cfg["store.path"])).expanduser(),
        layout=layout,
        thresholds=RuleThresholds(min_matches=min_matches, max_higher_share=max_higher_share),
    )
