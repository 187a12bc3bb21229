# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import sys

from gitlanes.prefsfile import PrefsFile
from gitlanes.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)

TEST_MODE = "pytest" in sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
"""

DEVDEBUG = TEST_MODE
"""
Enable expensive assertions and debugging features.
Can be forced with command-line switch "--debug".
"""


class LoggingLevel(enum.IntEnum):
    BENCHMARK = BENCHMARK_LOGGING_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_graph             : int                   = 0
    maxCommits                  : int                   = 500
    graphPaletteSize            : int                   = 8
    chronologicalOrder          : bool                  = True

    _category_log               : int                   = 0
    shortHashChars              : int                   = 7
    shortTimeFormat             : str                   = "%Y-%m-%d %H:%M"

    _category_advanced          : int                   = 0
    verbosity                   : LoggingLevel          = LoggingLevel.WARNING

    _minimums = {
        "graphPaletteSize": 1,
        "shortHashChars": 1,
    }

    def load(self) -> bool:
        loaded = super().load()

        # Well-typed but unusable values fall back to their defaults
        for f in dataclasses.fields(self):
            minimum = self._minimums.get(f.name)
            if minimum is not None and getattr(self, f.name) < minimum:
                logger.warning(f"{self._filename}: {f.name} must be at least {minimum}, using {f.default}")
                setattr(self, f.name, f.default)

        return loaded


# Initialize default prefs.
# The app should load the user's prefs with prefs.load().
prefs = Prefs()
