"""
Extraction pipeline: region OCR plus decoding into an ExtractedCardRecord.
"""

from cardreader.extraction.assembler import assemble_record
from cardreader.extraction.pipeline import CardExtractor, extract_card

__all__ = [
    'assemble_record',
    'CardExtractor',
    'extract_card',
]
