"""VUCE tracking dashboard core: fetch, normalize, filter and aggregate records."""

__version__ = "0.1.0"
