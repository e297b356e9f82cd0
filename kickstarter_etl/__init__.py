"""
Kickstarter ETL Package

Loads the Kickstarter projects dataset into a relational store.

Subpackages:
- core: Configuration, logging, exceptions
- database: SQLAlchemy models, engine, schema management
- etl: Extract, Transform, Load pipeline
"""
