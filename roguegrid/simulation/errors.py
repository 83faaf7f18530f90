"""Errors — the failure taxonomy of the simulation core.

Configuration and placement errors are fatal for the level being set up
and are raised before any entity exists.  Phase errors are rejected
operations: the caller should simply wait until the scheduler allows
the request.  Game over is not an error.
"""

from __future__ import annotations


class RoguegridError(Exception):
    """Base class for all simulation errors."""


class ConfigurationError(RoguegridError, ValueError):
    """Invalid grid dimensions, offsets, or count ranges."""


class ExhaustedPoolError(RoguegridError):
    """More placements were requested than spawnable cells remain."""


class InvalidPhaseTransition(RoguegridError):
    """An operation was requested outside the phase that allows it."""
