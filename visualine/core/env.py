"""Configuration from the environment and .env files.

Load order (first wins):
  1. Command-line flags (applied by the CLI on top of Settings).
  2. Existing OS environment variables — never overwritten.
  3. .env file at --env-file path (if explicitly provided).
  4. .env file walking up from cwd, stopping at .git (file or dir).

Variables:
  VISUALINE_PALETTE    path to a baseline-data JSON palette
  VISUALINE_VERBOSE    1/true/yes/on enables debug logging
  VISUALINE_LOG_JSON   1/true/yes/on switches logs to JSON lines
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = 'VISUALINE_'
_TRUTHY = {'1', 'true', 'yes', 'on'}


def find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return the first .env found, stop at a .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def read_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes around values are stripped; '#' lines skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys that are not already set.

    Returns the file that was loaded, or None.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in read_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _flag(value: str | None) -> bool:
    return (value or '').strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    palette_path: str | None = None
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        env = os.environ if environ is None else environ
        return cls(
            palette_path=env.get(f'{ENV_PREFIX}PALETTE') or None,
            verbose=_flag(env.get(f'{ENV_PREFIX}VERBOSE')),
            log_json=_flag(env.get(f'{ENV_PREFIX}LOG_JSON')),
        )
