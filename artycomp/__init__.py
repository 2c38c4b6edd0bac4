"""Artillery fire-direction computer: grids, storage, ballistic firing solutions and a console menu."""

__version__ = "0.1.0"
__all__ = ["__version__"]