"""
AI Placement Helper
Company research and interview preparation backend.

Architecture:
- MongoDB: Cache of resolved company profiles
- CSV dataset: Bulk company records held in memory
- Web sources: SerpAPI, Wikidata, Wikipedia, DuckDuckGo, YouTube
- LLM: Job description parsing only (never a source of company facts)
"""

__version__ = "1.0.0"
