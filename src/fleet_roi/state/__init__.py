"""Input persistence — share-link query strings and a local JSON store."""

from fleet_roi.state.url import parse_query, serialize_query
from fleet_roi.state.storage import InputStore

__all__ = ["InputStore", "parse_query", "serialize_query"]
