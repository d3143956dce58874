# -*- coding: utf-8 -*-
"""
Settings Module
Configuration of the bounds updater and logging setup.
"""

import json
import logging
import os
from dataclasses import dataclass, fields

LOGGER_NAME = "bounds_updater"
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass
class BoundsUpdaterSettings:
    """Tunable behaviour of the bounds updater.

    Attributes:
        lenient_transform:     Allow ballpark (datum-less) CRS transforms.
        max_points_to_project: Point budget when reprojecting an envelope.
        priority:              Ordering hint reported to the host pipeline.
        log_level:             Level name for the ``bounds_updater`` logger.
    """

    lenient_transform: bool = True
    max_points_to_project: int = 1000
    priority: int = 0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_points_to_project < 4:
            raise ValueError(
                f"max_points_to_project must be at least 4, got {self.max_points_to_project}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: dict) -> 'BoundsUpdaterSettings':
        """Build settings from a dict. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in (data or {}).items() if k in known}
        try:
            if 'lenient_transform' in values:
                values['lenient_transform'] = _to_bool(values['lenient_transform'])
            if 'max_points_to_project' in values:
                values['max_points_to_project'] = int(values['max_points_to_project'])
            if 'priority' in values:
                values['priority'] = int(values['priority'])
            if 'log_level' in values:
                values['log_level'] = str(values['log_level'])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid bounds updater settings: {e}") from e
        return cls(**values)

    @classmethod
    def load(cls, path) -> 'BoundsUpdaterSettings':
        """Read settings from a JSON file. A missing file yields the defaults."""
        if not os.path.exists(path):
            return cls()
        with open(path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a JSON object")
        return cls.from_dict(data)


def _to_bool(value):
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('1', 'true', 'yes', 'on'):
            return True
        if lowered in ('0', 'false', 'no', 'off'):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return bool(value)


def configure_logging(settings=None, handler=None):
    """Attach a handler to the ``bounds_updater`` logger at the configured level.

    Calling it again replaces the handler installed by the previous call.

    Returns:
        logging.Logger
    """
    settings = settings or BoundsUpdaterSettings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    for existing in list(logger.handlers):
        if getattr(existing, '_bounds_updater_handler', False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._bounds_updater_handler = True
    logger.addHandler(handler)
    return logger
