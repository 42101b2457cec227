#!/usr/bin/env python3
"""
Persistence Port for Learner State

The learning system and the progress tracker persist their aggregates through
this key/value contract. Values are serialized JSON documents; every save
overwrites the full state stored under the key.

"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union
import logging

logger = logging.getLogger(__name__)

# Logical keys used by the engine
PROFILE_KEY = 'learner_profile'
PROGRESS_KEY = 'progress'


class StateStore(ABC):
    """
    Abstract key/value store for serialized learner state.

    Implementations are expected not to fail; errors propagate to the caller.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Load the serialized state stored under a key.

        Args:
            key: Logical state key

        Returns:
            Serialized state, or None if nothing has been saved
        """
        pass

    @abstractmethod
    def save(self, key: str, state: str) -> None:
        """Overwrite the state stored under a key."""
        pass


class InMemoryStore(StateStore):
    """Dictionary-backed store, used for tests and embedded sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, state: str) -> None:
        self._data[key] = state

    def keys(self):
        return list(self._data)


class JsonFileStore(StateStore):
    """
    One JSON file per key inside a directory.

    The directory is created on first save.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

        logger.info(f"JsonFileStore using {self.directory}")

    def _path_for(self, key: str) -> Path:
        # Keep keys to safe filename characters
        safe_key = re.sub(r'[^\w.-]', '_', key)
        return self.directory / f"{safe_key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None

        return path.read_text(encoding='utf-8')

    def save(self, key: str, state: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path_for(key).write_text(state, encoding='utf-8')

        logger.debug(f"Saved state for '{key}'")
