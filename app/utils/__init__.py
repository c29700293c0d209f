"""
Utility package exports
"""

from app.utils.helpers import flatten_list, strip_value, extract_json_block, remove_json_block, load_json_safely

__all__ = ["flatten_list", "strip_value", "extract_json_block", "remove_json_block", "load_json_safely"]
