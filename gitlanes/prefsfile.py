# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os
import tempfile
from typing import Any

from gitlanes.appconsts import APP_SYSTEM_NAME

logger = logging.getLogger(__name__)


class PrefsFile:
    """
    Base class for a dataclass of user preferences stored as a JSON object.

    Only the fields that differ from their defaults are written out.
    Fields whose name starts with an underscore are never persisted.
    """

    _filename = ""

    def getParentDir(self) -> str:
        from gitlanes.settings import TEST_MODE
        if TEST_MODE:
            return os.path.join(tempfile.gettempdir(), f"{APP_SYSTEM_NAME}-testmode-config")
        configHome = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
        return os.path.join(configHome, APP_SYSTEM_NAME)

    def getFullPath(self) -> str:
        assert self._filename, "you must override _filename"
        return os.path.join(self.getParentDir(), self._filename)

    def publicFields(self) -> list[dataclasses.Field]:
        assert dataclasses.is_dataclass(self)
        return [f for f in dataclasses.fields(self) if not f.name.startswith("_")]

    def reset(self):
        for f in dataclasses.fields(self):
            setattr(self, f.name, f.default)

    def write(self) -> str:
        """
        Save non-default values. Return the path to the file, or an empty
        string if there was nothing to save (any stale file is deleted).
        """
        path = self.getFullPath()

        changed = {f.name: self.encode(getattr(self, f.name))
                   for f in self.publicFields()
                   if getattr(self, f.name) != f.default}

        if not changed:
            if os.path.isfile(path):
                logger.debug(f"All defaults, deleting {path}")
                os.unlink(path)
            return ""

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wt", encoding="utf-8") as jsonFile:
            json.dump(changed, jsonFile, indent="\t")

        logger.info(f"Wrote {path}")
        return path

    def load(self) -> bool:
        """
        Overwrite fields with the values found in the file. Unknown keys and
        values of the wrong type are dropped with a warning.
        Return False if the file is missing or unreadable.
        """
        path = self.getFullPath()
        if not os.path.isfile(path):
            return False

        with open(path, "rt", encoding="utf-8") as file:
            try:
                jsonObject = json.load(file)
            except ValueError as loadError:
                logger.warning(f"{path}: {loadError}", exc_info=True)
                return False

        if not isinstance(jsonObject, dict):
            logger.warning(f"{path}: expected a JSON object")
            return False

        fieldTypes = {f.name: f.type for f in self.publicFields()}

        for key, value in jsonObject.items():
            if key not in fieldTypes:
                logger.warning(f"{path}: dropping key: {key}")
                continue

            try:
                value = self.decode(value, fieldTypes[key])
            except ValueError as error:
                logger.warning(f"{path}: {key}: {error}")
                continue

            setattr(self, key, value)

        return True

    @staticmethod
    def encode(o: Any) -> Any:
        if isinstance(o, enum.Enum):
            return o.value
        return o

    @staticmethod
    def decode(o: Any, dstType: type) -> Any:
        """ Convert a value coming from a JSON blob to the type of a field """
        if issubclass(dstType, enum.Enum):
            # Raises ValueError if the value isn't a member
            return dstType(o)

        # bool is a subclass of int, don't let it pass for one
        if type(o) is bool and dstType is not bool:
            raise ValueError("unexpected JSON field type")

        if not isinstance(o, dstType):
            raise ValueError("unexpected JSON field type")

        return o
