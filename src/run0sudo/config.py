import os
from pathlib import Path
from typing import Any, Optional

# tomllib is stdlib in Python 3.11+. Fall back to tomli for older versions.
try:
    import tomllib  # type: ignore
except Exception:  # pragma: no cover - platform dependent
    try:
        import tomli as tomllib  # type: ignore
    except Exception:
        tomllib = None  # type: ignore


ENV_PREFIX = 'RUN0SUDO_'

_ALLOWED_KEYS = {
    'run0_path': str,
    'log_level': str,
    'log_file': str,
}

_CODE_DEFAULTS: dict[str, Any] = {
    'run0_path': 'run0',
    'log_level': 'WARNING',
    'log_file': None,
}


def _config_file_path() -> Path:
    xdg = os.getenv('XDG_CONFIG_HOME')
    if xdg:
        base = Path(xdg)
    else:
        base = Path.home() / '.config'
    return base / 'run0sudo' / 'config.toml'


def load_config() -> dict[str, Any]:
    """Load TOML configuration from XDG config path. Returns empty dict on error."""
    if tomllib is None:
        return {}
    p = _config_file_path()
    if not p.exists():
        return {}
    try:
        with p.open('rb') as f:
            data = tomllib.load(f)
            if isinstance(data, dict):
                return data
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}
    return {}


def get_effective_value(key: str, code_default: Any = None) -> dict[str, Any] | None:
    """Return a dict with env/config/code default/effective for a key.

    Precedence: environment RUN0SUDO_<KEY> > config file > code default.
    Returns None if key is not allowed.
    """
    if key not in _ALLOWED_KEYS:
        return None

    env = os.getenv(ENV_PREFIX + key.upper()) or None
    cfg = load_config()
    cfg_val = cfg.get(key)
    if cfg_val is not None and not isinstance(cfg_val, _ALLOWED_KEYS[key]):
        cfg_val = None

    eff_default = code_default if code_default is not None else _CODE_DEFAULTS.get(key)

    effective: Any
    if env is not None:
        effective = env
    elif cfg_val is not None:
        effective = cfg_val
    else:
        effective = eff_default

    return {'env': env, 'config': cfg_val, 'code_default': eff_default, 'effective': effective}


def get_run0_path(default: Optional[str] = None) -> str:
    """Return the privilege-elevation binary to exec (``run0`` unless configured)."""
    info = get_effective_value('run0_path', default)
    return info['effective'] if info else 'run0'


def get_log_level(default: Optional[str] = None) -> str:
    info = get_effective_value('log_level', default)
    return str(info['effective']).upper() if info else 'WARNING'


def get_log_file() -> Optional[Path]:
    info = get_effective_value('log_file')
    if not info or not info['effective']:
        return None
    return Path(info['effective']).expanduser()
