"""Inspect Gradle projects from CI by querying the Gradle CLI."""

from gradle_inspector.version import __version__

__all__ = ['__version__']
