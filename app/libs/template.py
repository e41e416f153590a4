"""
``{{NAME}}`` placeholder substitution for request files.

The environment is read once into a plain mapping and handed to
``resolve_placeholders``, which never touches ``os.environ`` itself.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def load_environment(env_file: str | Path | None = ".env") -> dict[str, str]:
    """
    Snapshot the variables visible to placeholders.

    Values from the dotenv file come first and are overridden by the
    process environment. A missing dotenv file contributes nothing.
    """
    env: dict[str, str] = {}
    if env_file and Path(env_file).is_file():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ)
    return env


def resolve_placeholders(text: str, env: Mapping[str, str]) -> str:
    """Replace each ``{{NAME}}`` bound in ``env``; unbound placeholders stay as written."""

    def _replace(match: re.Match[str]) -> str:
        return env.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_replace, text)
