"""
Configuration module for uploadhandler (configs).
"""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"true", "1", "yes", "on"}


class Config:
    def __init__(self) -> None:
        # Logging / runtime
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_file = os.getenv("LOG_FILE")
        self.log_dir = os.getenv("LOG_DIR", "logs")

        # Upload handling
        self.handlers_file = os.getenv("UPLOAD_HANDLERS_FILE")
        self.max_upload_bytes = int(
            os.getenv("UPLOAD_MAX_BYTES", str(100 * 1024 * 1024))
        )
        self.suppress_exceptions = _env_bool("UPLOAD_SUPPRESS_EXCEPTIONS", False)
        self.append_random = _env_bool("UPLOAD_APPEND_RANDOM", True)
        self.overwrite = _env_bool("UPLOAD_OVERWRITE", True)

    @property
    def upload_options(self) -> dict[str, Any]:
        """Library-wide options applied to every handler."""
        return {
            "appendRandom": self.append_random,
            "overwrite": self.overwrite,
            "suppressExceptions": self.suppress_exceptions,
        }

    def load_handlers(self) -> dict[str, Any]:
        """Read handler definitions from ``UPLOAD_HANDLERS_FILE``.

        The file holds either ``{"handlers": {...}, "options": {...}}`` or just
        the handler map. Environment options fill in options the file omits.
        """
        if not self.handlers_file:
            return {"handlers": {}, "options": self.upload_options}

        path = Path(self.handlers_file).expanduser()
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if "handlers" not in data:
            data = {"handlers": data}
        data["options"] = {**self.upload_options, **(data.get("options") or {})}
        return data


config = Config()
