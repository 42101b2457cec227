"""
Storage Module

Key/value persistence port for learner state plus in-memory and JSON file
implementations.
"""

from .state_store import StateStore, InMemoryStore, JsonFileStore, PROFILE_KEY, PROGRESS_KEY

__all__ = [
    'StateStore',
    'InMemoryStore',
    'JsonFileStore',
    'PROFILE_KEY',
    'PROGRESS_KEY'
]
