"""Archive Pages — editable landing pages for content type listings."""

__version__ = "0.2.0"
