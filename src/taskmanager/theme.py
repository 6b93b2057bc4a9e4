"""Color & style helpers for console output.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR and TASKMGR_COLOR=0 for complete disable.
- Supports palette overrides via environment or a .env file in the
  working directory.
- Only ever wraps already-padded text, so table alignment is unaffected.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

PALETTE_KEYS = ('TASKMGR_PRIMARY', 'TASKMGR_PENDING', 'TASKMGR_COMPLETED', 'TASKMGR_ERROR')

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = (os.environ.get("NO_COLOR") is not None
             or os.environ.get("TASKMGR_COLOR", "").strip().lower() in {"0", "false", "no", "off"})
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)


def read_env_overrides(path: Path) -> dict[str, str]:
    """Palette entries from a KEY=VALUE file; unknown keys and bad hex are skipped."""
    overrides: dict[str, str] = {}
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k, v = k.strip(), v.strip()
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_DEFAULTS = {
    'TASKMGR_PRIMARY': '#476EAE',
    'TASKMGR_PENDING': '#F6FF99',
    'TASKMGR_COMPLETED': '#A7E399',
    'TASKMGR_ERROR': '#E36B6B',
}

_env_path = Path.cwd() / '.env'
_ENV_OVERRIDES = read_env_overrides(_env_path) if _env_path.exists() else {}


def _resolve(key: str) -> str:
    # priority: real env var > .env override > default
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, HEX_DEFAULTS[key])


PRIMARY = _from_hex(_resolve('TASKMGR_PRIMARY'))
C_PENDING = _from_hex(_resolve('TASKMGR_PENDING'))
C_COMPLETED = _from_hex(_resolve('TASKMGR_COMPLETED'))
C_ERROR = _from_hex(_resolve('TASKMGR_ERROR'))

STATUS_COLOR = {
    'pending': C_PENDING,
    'completed': C_COMPLETED,
}

HEADER_COLOR = PRIMARY
SUCCESS_COLOR = C_COMPLETED
ERROR_COLOR = C_ERROR
NOTICE_COLOR = DIM + PRIMARY


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'read_env_overrides', 'RESET', 'BOLD', 'DIM', 'STATUS_COLOR', 'HEADER_COLOR',
    'SUCCESS_COLOR', 'ERROR_COLOR', 'NOTICE_COLOR',
]
