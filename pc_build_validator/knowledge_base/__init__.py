"""
Knowledge Base Module

Contains the static hardware lookup tables (power tiers, GPU lengths,
socket/chipset generations) used by the estimation fallbacks.
"""

from .base import KnowledgeBase
from .data_structures import HardwareKnowledgeBase, LookupEntry
from .loader import DEFAULT_TABLES_FILE, KnowledgeBaseLoader, get_default_knowledge_base

__all__ = [
    'KnowledgeBase',
    'HardwareKnowledgeBase',
    'LookupEntry',
    'KnowledgeBaseLoader',
    'DEFAULT_TABLES_FILE',
    'get_default_knowledge_base',
]
