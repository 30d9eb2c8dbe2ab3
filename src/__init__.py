"""artifactcache: key-addressed local artifact cache."""

from artifactcache.version import __version__

__all__ = ["__version__"]
