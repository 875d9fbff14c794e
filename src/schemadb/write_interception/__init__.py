"""Write interception exports."""

from .bound_model import Model

__all__ = ["Model"]
