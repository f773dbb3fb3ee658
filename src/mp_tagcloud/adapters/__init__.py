"""Adapters – concrete storage backends for the aggregation ports."""
