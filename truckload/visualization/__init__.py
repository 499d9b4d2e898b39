"""
Visualization modules for truck load plans

Provides interactive 3D visualization of packing results.
"""

from .plotly_3d import LayoutVisualizer

__all__ = ["LayoutVisualizer"]
