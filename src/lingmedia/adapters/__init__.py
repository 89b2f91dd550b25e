"""Adapters from parsed FLEx and ELAN documents to metadata records."""

from lingmedia.adapters.elan import improve_elan_index_data
from lingmedia.adapters.flex import document_has_timestamps, improve_flex_index_data

__all__ = [
    "document_has_timestamps",
    "improve_elan_index_data",
    "improve_flex_index_data",
]
