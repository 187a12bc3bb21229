# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os

# Verbose logging by default in unit tests
logging.basicConfig(level=logging.DEBUG)
logging.captureWarnings(True)

# Paint without a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Keep QT_API env var (used by our qt.py module) in sync with Qt binding used by pytest-qt
if os.environ.get("PYTEST_QT_API") and os.environ.get("QT_API"):
    # PYTEST_QT_API takes precedence over QT_API
    os.environ["QT_API"] = os.environ["PYTEST_QT_API"]
elif os.environ.get("QT_API"):
    os.environ["PYTEST_QT_API"] = os.environ["QT_API"]
