"""
Privacy Guard Errors

Unreadable input is not an error: the scanner treats it as empty content.
These exceptions cover the conditions that stop a command outright.
"""

from __future__ import annotations


class PrivacyGuardError(Exception):
    """Base class for errors reported to the user."""


class InvalidInvocationError(PrivacyGuardError):
    """A command was called without the input it requires."""


class GitError(PrivacyGuardError):
    """git is missing or the working directory is not a repository."""


class ConfigError(PrivacyGuardError):
    """The configuration file holds a value that cannot be used."""
