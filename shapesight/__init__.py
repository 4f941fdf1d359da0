"""ShapeSight — rule-based shape detection for raster images."""

__version__ = "0.1.0"
