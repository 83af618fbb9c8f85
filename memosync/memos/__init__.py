"""Memos server API: wire models and the paginating client."""

from memosync.memos.client import PAGE_SIZE, MemosClient
from memosync.memos.types import MemoItem, MemoResource, MemosPage

__all__ = ["PAGE_SIZE", "MemoItem", "MemoResource", "MemosClient", "MemosPage"]
