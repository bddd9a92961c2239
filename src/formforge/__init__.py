"""formforge: constraint validation for form components."""

__version__ = "0.1.0"
