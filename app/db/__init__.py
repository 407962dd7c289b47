"""
Database module - MongoDB connection for the company cache.
"""
from app.db.mongodb import MongoConnection, init_company_indexes

__all__ = [
    "MongoConnection",
    "init_company_indexes",
]
