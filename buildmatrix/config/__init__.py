"""Settings for buildmatrix."""

from buildmatrix.config.settings import BuildMatrixSettings, create_settings


__all__ = ["BuildMatrixSettings", "create_settings"]
