"""CPU renderers: a shaded triangle rasterizer with an OBJ loader, ray-tracing scene primitives and Bezier curves."""

__version__ = "0.1.0"