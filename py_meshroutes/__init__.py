"""
py-meshroutes: diverging shortest routes over a random Delaunay mesh.
"""

__version__ = "0.1.0"
