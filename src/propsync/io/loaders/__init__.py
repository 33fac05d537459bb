from .errors import LoaderError
from .values_loader import ValueEntrySpec, apply_values, load_values

__all__ = ["LoaderError", "ValueEntrySpec", "apply_values", "load_values"]
