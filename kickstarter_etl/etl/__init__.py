"""
ETL Package

Extract, Transform, Load pipeline for the Kickstarter projects dataset.

Modules:
- archive: Zip entry lookup
- reader: CSV decoding
- records: In-memory record schemas
- transformer: Source record to star schema conversion
- writer: Database writing
- loader: ETL orchestration
"""

from kickstarter_etl.etl.loader import ETLLoader, ETLStatus

__all__ = [
    "ETLLoader",
    "ETLStatus",
]
