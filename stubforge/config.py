from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv  # type: ignore

load_dotenv()

logger = logging.getLogger(__name__)


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not a whole number; using %s", name, raw, default)
        return default


# -----------------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------------
IMPL_SUFFIX = "Impl"
SOURCE_ENCODING = (os.getenv("STUBFORGE_ENCODING") or "").strip() or "utf-8"
INDENT = "\t"

# roots searched for <pkg>/<Name>.java, separated like PATH
_SOURCE_PATH_RAW = os.getenv("STUBFORGE_SOURCE_PATH", "").strip()
SOURCE_PATH: List[Path] = [Path(p) for p in _SOURCE_PATH_RAW.split(os.pathsep) if p] or [Path(".")]

# -----------------------------------------------------------------------------
# Toolchain
# -----------------------------------------------------------------------------
JAVAC = (os.getenv("STUBFORGE_JAVAC") or "").strip() or "javac"
JAVAC_TIMEOUT_SECONDS = env_int("STUBFORGE_JAVAC_TIMEOUT", 300)

MANIFEST_VERSION = "1.0"
MANIFEST_PATH = "META-INF/MANIFEST.MF"
ARCHIVE_SUFFIX = ".jar"

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_LEVEL = (os.getenv("STUBFORGE_LOG_LEVEL") or "").strip().upper() or "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
