"""
Subtitle processing modules.

This package contains the operations built on the core modules:
- Track extraction with mkvextract
- Two-color merging
- Timing shifts
- Batch extract-merge
"""

from .extractor import SubtitleExtractor
from .merger import SubtitleMerger, SubtitleSource
from .timing_adjuster import TimingAdjuster
from .batch_processor import BatchProcessor

__all__ = [
    'SubtitleExtractor',
    'SubtitleMerger',
    'SubtitleSource',
    'TimingAdjuster',
    'BatchProcessor',
]
