"""Resolve Docker-secret style ``*_FILE`` variables (e.g. ZABBIX_TOKEN_FILE)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def load_secret_file_variables() -> None:
    """
    Expose the content of every ``KEY_FILE`` file through ``KEY``.

    An already populated ``KEY`` wins over its file. Unreadable files are
    logged and skipped.
    """

    for key, file_path in list(os.environ.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if os.environ.get(target_key):
            continue

        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            _warn("env.secret_file.missing", key, file_path, exc)
        except UnicodeDecodeError as exc:
            _warn("env.secret_file.decode_failed", key, file_path, exc)
        except OSError as exc:
            _warn("env.secret_file.load_failed", key, file_path, exc)


def _warn(event: str, key: str, file_path: str, exc: Exception) -> None:
    logger.warning(event, extra={"key": key, "path": file_path, "error": str(exc)})


load_secret_file_variables()
