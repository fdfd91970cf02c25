"""
Type definitions used across layers
"""

from enum import StrEnum


class Platform(StrEnum):
    IOS = "ios"
    ANDROID = "android"


class ErrorKind(StrEnum):
    """What went wrong, as far as the API boundary is concerned."""

    VALIDATION = "validation"
    PIPELINE_FATAL = "pipeline fatal"
    SOURCE_LOCAL = "source local"
    UNEXPECTED = "unexpected"
