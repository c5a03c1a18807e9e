"""Release number of tagbump and the interpreters it supports."""

__version__ = "1.0.0"
PROJECT_VERSION = __version__
REQUIRES_PYTHON = ">=3.10"
