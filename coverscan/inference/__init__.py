from coverscan.inference.base import BaseCoverExtractor
from coverscan.inference.extractor import CoverExtractor
from coverscan.inference.factory import CoverExtractorFactory
from coverscan.inference.response_parser import parse_cover_metadata

__all__ = [
    "BaseCoverExtractor",
    "CoverExtractor",
    "CoverExtractorFactory",
    "parse_cover_metadata",
]
