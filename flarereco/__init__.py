"""Reconstruction tools: truth records, detector geometry, circle and line fits, PCA directions and shower profiles."""

__version__ = "0.1.0"

__all__ = ["records", "geometry", "circle_fit", "linear_fit", "pca", "shower_lid"]