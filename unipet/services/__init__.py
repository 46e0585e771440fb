"""
Services Package

Exports all services for easy importing.
"""

from unipet.services.text import sanitize_text, validate_text_length, get_text_stats
from unipet.services.images import (
    ProcessedImage,
    compress_data_uri,
    data_uri_info,
    decode_data_uri,
    fetch_remote_image,
    process_image,
    to_data_uri,
    validate_data_uri,
)

__all__ = [
    'sanitize_text',
    'validate_text_length',
    'get_text_stats',
    'ProcessedImage',
    'compress_data_uri',
    'data_uri_info',
    'decode_data_uri',
    'fetch_remote_image',
    'process_image',
    'to_data_uri',
    'validate_data_uri',
]
