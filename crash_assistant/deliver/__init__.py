"""
Delivery of symbolicated output: suggested naming and saving.
"""

from .naming import suggested_output_name, suggested_output_path
from .writer import save_output

__all__ = ["suggested_output_name", "suggested_output_path", "save_output"]
