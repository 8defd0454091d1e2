from .normalize import to_arrays, to_points

__all__ = ["to_arrays", "to_points"]
