"""Where the tasks file lives.

Resolution order: TODO_CLI_FILE environment variable > ~/.todo-cli.json >
./.todo-cli.json when no home directory can be determined. The result is
handed to TaskStore explicitly; nothing else reads these settings.
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Mapping, Optional

STORE_ENV_VAR = 'TODO_CLI_FILE'
DEFAULT_FILENAME = '.todo-cli.json'


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError):  # no HOME and no pwd entry
        return Path('.')


def default_store_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(STORE_ENV_VAR, '').strip()
    if override:
        return Path(override).expanduser()
    return _home_dir() / DEFAULT_FILENAME
