"""
Kickstarter ETL Custom Exceptions
"""


class KickstarterETLError(Exception):
    """Base exception for all Kickstarter ETL errors"""

    pass


class DecodeError(KickstarterETLError):
    """Malformed archive entry, header or field"""

    pass


class StoreError(KickstarterETLError):
    """DDL, insert or metadata query failures"""

    pass


class ConfigError(KickstarterETLError):
    """Store connection or input file cannot be opened"""

    pass
