"""
data_model — struktury danych hadisów.

Użycie:
  from data_model import HadithRecord, HadithIndex, SourcePage, ...

Moduły:
  hadiths    — SourcePage, HadithRecord, HadithIndex, DEFAULT_TITLE
  translated — translated_record, passthrough_record

Mapowanie na pliki wyjściowe:
  hadiths.json            → list[HadithRecord.to_dict()]
  hadiths_translated.json → rekordy + title_fa, content_fa
"""

from .hadiths import (
    DEFAULT_TITLE,
    SourcePage,
    HadithRecord,
    HadithIndex,
)
from .translated import (
    translated_record,
    passthrough_record,
)

__all__ = [
    # hadiths
    "DEFAULT_TITLE",
    "SourcePage",
    "HadithRecord",
    "HadithIndex",
    # translated
    "translated_record",
    "passthrough_record",
]
