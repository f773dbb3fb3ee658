"""
mp_tagcloud – tag cloud aggregation for MongoDB-backed entities.

Import path convention::

    from mp_tagcloud.aggregation import AggregationRegistry
    from mp_tagcloud.aggregation.strategies import BatchRecompute, RealTime
    from mp_tagcloud.adapters.mongodb import MongoBackend
    from mp_tagcloud.kernel.errors import ConfigurationError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
