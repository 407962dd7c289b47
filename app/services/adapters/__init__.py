"""Company data sources, in cascade order."""

from app.services.adapters.base import AdapterOutcome, SourceAdapter
from app.services.adapters.cache import CacheAdapter
from app.services.adapters.curated import CuratedAdapter
from app.services.adapters.dataset import DatasetAdapter
from app.services.adapters.encyclopedia import EncyclopediaAdapter
from app.services.adapters.instant_answer import InstantAnswerAdapter
from app.services.adapters.knowledge_graph import KnowledgeGraphAdapter
from app.services.adapters.linked_data import LinkedDataAdapter
from app.services.adapters.placeholder import PlaceholderAdapter

__all__ = [
    "AdapterOutcome",
    "SourceAdapter",
    "CacheAdapter",
    "DatasetAdapter",
    "KnowledgeGraphAdapter",
    "LinkedDataAdapter",
    "EncyclopediaAdapter",
    "InstantAnswerAdapter",
    "CuratedAdapter",
    "PlaceholderAdapter",
]
