"""Environment helpers (python-dotenv wrapper)."""

import os

from dotenv import dotenv_values, find_dotenv


def environ_with_dotenv(path: str | None = None, *, override: bool = False) -> dict[str, str]:
    """
    Merge a .env file with the process environment.

    Process variables win unless *override* is set. Keys declared in the file
    without a value are dropped. When *path* is None the file is searched for
    in the current directory and its parents.
    """
    if path is None:
        path = find_dotenv(usecwd=True)
    file_values = {k: v for k, v in dotenv_values(path).items() if v is not None} if path else {}
    if override:
        return {**os.environ, **file_values}
    return {**file_values, **os.environ}
