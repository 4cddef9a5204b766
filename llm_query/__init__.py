"""
llm_query — tłumaczenie hadisów przez Gemini.

Publiczne API:
  build_translation_prompt(text, is_title)          -> str
  KeyRing(keys)                                     — rotacja kluczy API
  api_keys_from_env()                               -> list[str]
  Translator(ring, model)                           — tłumacz z cache tytułów
  translate_hadiths(hadiths, out_path, translator)  -> TranslationSummary
  write_passthrough(hadiths, out_path)              -> int
  load_translated(path)                             -> list[dict]
  fix_translated_file(path)                         -> int
"""

from .prompt import build_translation_prompt
from .gemini import (
    DEFAULT_MODEL,
    KeyRing,
    TranslationConfigError,
    api_keys_from_env,
)
from .translate import (
    TRANSLATED_FILE,
    Translator,
    TranslationSummary,
    load_translated,
    save_translated,
    translate_hadiths,
    write_passthrough,
)
from .honorifics import expand_honorifics, fix_translated_file

__all__ = [
    "build_translation_prompt",
    "DEFAULT_MODEL",
    "KeyRing",
    "TranslationConfigError",
    "api_keys_from_env",
    "TRANSLATED_FILE",
    "Translator",
    "TranslationSummary",
    "load_translated",
    "save_translated",
    "translate_hadiths",
    "write_passthrough",
    "expand_honorifics",
    "fix_translated_file",
]
