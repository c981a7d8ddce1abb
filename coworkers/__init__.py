"""coworkers - named, persistent handles to agent sessions."""

__version__ = "0.1.0"
