"""Speech analysis building blocks: synthesis, filtering, processing nodes and rendering helpers."""

__version__ = "0.1.0"

__all__ = ["synthesis", "nodeio", "node", "spectrum", "trackers", "colormap", "renderer"]