"""Record sources — read-only access to the document store."""

from diabreport.sources.base import Filter, RecordSource, report_filters
from diabreport.sources.json_file import JsonFileRecordSource
from diabreport.sources.memory import InMemoryRecordSource

__all__ = [
    "Filter",
    "InMemoryRecordSource",
    "JsonFileRecordSource",
    "RecordSource",
    "report_filters",
]
