"""
Image output for generated route maps.
"""

from .rasterizer import render_route_map

__all__ = ['render_route_map']
