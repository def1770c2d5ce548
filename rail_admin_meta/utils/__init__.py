"""
Utility modules for rail-admin-meta.
"""

from .records import read_attribute

__all__ = ["read_attribute"]
