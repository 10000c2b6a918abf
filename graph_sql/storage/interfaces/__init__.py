"""
Storage interfaces for graph stores.
"""

from .graph_store_interface import GraphStore

__all__ = ["GraphStore"]
