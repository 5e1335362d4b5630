"""
CLI Utilities

Core utility functions for n8n-provision.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from n8n_provision import constants
from n8n_provision.exceptions import ConfigurationError, PrivilegeError


def is_root() -> bool:
    return os.geteuid() == 0


def ensure_root() -> None:
    """
    Raises:
        PrivilegeError: If not running as root
    """
    if not is_root():
        raise PrivilegeError(constants.ERROR_NOT_ROOT)


def load_answers(env_file: Optional[Path]) -> Dict[str, str]:
    """
    Load deployment answers from a dotenv file.

    Args:
        env_file: Path to the dotenv file (None for no file)

    Returns:
        Mapping of N8N_* keys to non-empty values
    """
    if env_file is None:
        return {}

    env_file = Path(env_file)
    if not env_file.exists():
        raise ConfigurationError(f"Answers file not found: {env_file}")

    return {key: value for key, value in dotenv_values(env_file).items() if value}

