"""namedraw — random name drawer for small group selection."""

__version__ = "0.1.0"
