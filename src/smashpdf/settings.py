# settings.py
import os
import json
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path

from .constants import (DEFAULT_PRESET, SPLIT_RANGE, SUFFIX_COMPRESSED, SUFFIX_PROTECTED,
                        SUFFIX_UNLOCKED, LOG_FORMAT)

SETTINGS_ENV = "SMASHPDF_SETTINGS"

@dataclass
class GeneralSettings:
    logging_enabled: bool = False
    gs_path: str = ""
    qpdf_path: str = ""

@dataclass
class CompressSettings:
    preset: str = DEFAULT_PRESET
    suffix: str = SUFFIX_COMPRESSED

@dataclass
class SplitSettings:
    mode: str = SPLIT_RANGE
    every_n: int = 2

@dataclass
class PasswordSettings:
    protect_suffix: str = SUFFIX_PROTECTED
    unlock_suffix: str = SUFFIX_UNLOCKED

@dataclass
class Settings:
    general: GeneralSettings = field(default_factory=GeneralSettings)
    compress: CompressSettings = field(default_factory=CompressSettings)
    split: SplitSettings = field(default_factory=SplitSettings)
    password: PasswordSettings = field(default_factory=PasswordSettings)

def default_settings_path():
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".smashpdf" / "settings.json"

def _set_from_dict(obj, data):
    if not isinstance(data, dict): return
    for f in fields(obj):
        if f.name in data:
            value = data[f.name]
            current = getattr(obj, f.name)
            if isinstance(current, bool) and not isinstance(value, bool):
                logging.warning(f"Ignoring setting {f.name}={value!r}, expected a boolean")
                continue
            if isinstance(current, int) and not isinstance(current, bool):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    logging.warning(f"Ignoring setting {f.name}={value!r}, expected an integer")
                    continue
            if isinstance(current, str) and not isinstance(value, str):
                logging.warning(f"Ignoring setting {f.name}={value!r}, expected a string")
                continue
            if f.name.endswith("suffix") and not value:
                logging.warning(f"Ignoring empty setting {f.name}, keeping {current!r}")
                continue
            setattr(obj, f.name, value)

def load_settings(path=None):
    settings = Settings()
    path = Path(path) if path else default_settings_path()
    if not path.exists(): return settings
    try:
        with open(path, 'r', encoding='utf-8') as f: s = json.load(f)
        _set_from_dict(settings.general, s.get('general', {}))
        _set_from_dict(settings.compress, s.get('compress', {}))
        _set_from_dict(settings.split, s.get('split', {}))
        _set_from_dict(settings.password, s.get('password', {}))
    except (OSError, ValueError, AttributeError) as e:
        logging.warning(f"Failed to load settings: {e}")
    return settings

def save_settings(settings, path=None):
    path = Path(path) if path else default_settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f: json.dump(asdict(settings), f, indent=4)
    except OSError as e:
        logging.warning(f"Failed to save settings: {e}")
        return False
    return True

def configure_logging(settings, log_dir=None, handler=None):
    """Attach (or detach) the app.log file handler according to the settings.

    Returns the active handler so the caller can pass it back on the next call.
    """
    root_logger = logging.getLogger()
    if handler:
        root_logger.removeHandler(handler)
        handler.close()
        handler = None

    if settings.general.logging_enabled:
        log_dir = Path(log_dir) if log_dir else default_settings_path().parent
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "app.log", 'w', 'utf-8')
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)
        logging.info("File logging enabled.")
    return handler
