"""
Collection store adapters (Supabase and in-memory).
"""

from .base_store import CollectionStore
from .memory_store import MemoryStore
from .supabase_store import SupabaseStore

__all__ = ["CollectionStore", "MemoryStore", "SupabaseStore"]
