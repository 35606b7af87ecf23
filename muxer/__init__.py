"""Music library tools: entities, a genre catalog, settings, logging and album similarity data."""

__version__ = "0.1.0"