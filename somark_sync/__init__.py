"""SoMark sync extractor: relay PDF/PNG/JPG documents to the SoMark API."""

__version__ = "0.1.0"
