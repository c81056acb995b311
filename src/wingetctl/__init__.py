"""wingetctl — back up and restore installed winget packages."""

__version__ = "0.3.0"
