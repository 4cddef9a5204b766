"""
llm_query/gemini.py — wywołanie Gemini API z rotacją kluczy.

Zmienna środowiskowa:
  GEMINI_API_KEY   lista kluczy API rozdzielona przecinkami (wymagana)

Opcjonalnie plik .env w katalogu głównym projektu:
  GEMINI_API_KEY=AIza...,AIzb...

Publiczne API:
  api_keys_from_env()                     -> list[str]
  KeyRing(keys)                           — stan rotacji kluczy
  generate_json(api_key, model, prompt)   -> str
  parse_translation(raw)                  -> str
  is_retryable(error)                     -> bool
"""

from __future__ import annotations

import functools
import json
import os
import pathlib
from typing import Protocol, cast

from dotenv import load_dotenv

try:
    from google import genai as _genai
    from google.genai import errors as _genai_errors
    from google.genai import types as _genai_types
except ImportError as _exc:
    raise ImportError(
        "Brakuje pakietu google-genai. Zainstaluj: pip install google-genai"
    ) from _exc

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env", override=True)


DEFAULT_MODEL = "gemini-2.0-flash-lite"
_ENV_KEY      = "GEMINI_API_KEY"

# 429 rate-limit, 503 usługa niedostępna
RETRYABLE_CODES = frozenset({429, 503})

# Liczba prób na jeden tekst = liczba kluczy × ATTEMPTS_PER_KEY
ATTEMPTS_PER_KEY = 3

# Pauza po pełnym cyklu: 2**3 s, podwajana przy kolejnych pauzach (max 2**6 s)
_BACKOFF_EXP_START = 3
_BACKOFF_EXP_MAX   = 6


TRANSLATION_SCHEMA = _genai_types.Schema(
    type=_genai_types.Type.OBJECT,
    properties={"translation": _genai_types.Schema(type=_genai_types.Type.STRING)},
    required=["translation"],
)


class TranslationConfigError(ValueError):
    """Brak kluczy API."""


def api_keys_from_env() -> list[str]:
    raw = os.getenv(_ENV_KEY, "")
    return [k.strip() for k in raw.split(",") if k.strip()]


# ---------------------------------------------------------------------------
# Rotacja kluczy
# ---------------------------------------------------------------------------

class KeyRing:
    """
    Maszyna stanów rotacji kluczy API.

    Stan: indeks bieżącego klucza, licznik kolejnych błędów 429/503,
    flaga ukończenia pełnego cyklu. Stan jest współdzielony przez wszystkie
    tłumaczenia jednego przebiegu.

    - sukces:  licznik błędów = 0
    - błąd:    licznik +1 (429/503) albo 0 (inne), przejście do następnego
               klucza; powrót do klucza 0 ustawia flagę pełnego cyklu;
               flaga + licznik >= 2 → pauza, licznik = 0
    """

    def __init__(self, keys: list[str]) -> None:
        keys = [k for k in keys if k]
        if not keys:
            raise TranslationConfigError(
                f"Brak kluczy Gemini API. Ustaw zmienną środowiskową {_ENV_KEY} "
                f"(klucze rozdzielone przecinkami)."
            )
        self.keys = keys
        self.index = 0
        self.consecutive_errors = 0
        self.full_cycle_completed = False
        self._backoffs = 0

    def __len__(self) -> int:
        return len(self.keys)

    @property
    def current(self) -> str:
        return self.keys[self.index]

    @property
    def max_attempts(self) -> int:
        return len(self.keys) * ATTEMPTS_PER_KEY

    def record_success(self) -> None:
        self.consecutive_errors = 0
        self._backoffs = 0

    def record_failure(self, retryable: bool) -> float:
        """
        Rejestruje błąd i przechodzi do następnego klucza.

        Returns:
            Czas pauzy w sekundach (0.0 gdy pauza niepotrzebna).
        """
        self.consecutive_errors = self.consecutive_errors + 1 if retryable else 0

        self.index = (self.index + 1) % len(self.keys)
        if self.index == 0:
            self.full_cycle_completed = True

        if self.full_cycle_completed and self.consecutive_errors >= 2:
            exponent = min(_BACKOFF_EXP_START + self._backoffs, _BACKOFF_EXP_MAX)
            self._backoffs += 1
            self.consecutive_errors = 0
            return float(2 ** exponent)
        return 0.0


def is_retryable(error: Exception) -> bool:
    return getattr(error, "code", None) in RETRYABLE_CODES


# ---------------------------------------------------------------------------
# Wywołanie API
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=16)
def _get_client(api_key: str) -> "_genai.Client":
    """Zwraca (i cache'uje) klienta Gemini dla danego klucza API."""
    return _genai.Client(api_key=api_key)


class _GeminiGenerateResponse(Protocol):
    text: str | None


class _GeminiModelsAPI(Protocol):
    def generate_content(
        self, *, model: str, contents: str, config: _genai_types.GenerateContentConfig
    ) -> _GeminiGenerateResponse:
        ...


def generate_json(api_key: str, model: str, prompt: str) -> str:
    """
    Wysyła prompt i zwraca surowy JSON {"translation": "..."}.

    Raises:
        google.genai.errors.APIError: błąd API (kod HTTP w .code).
        ValueError:                   pusta odpowiedź.
    """
    client = _get_client(api_key)
    models_api = cast(_GeminiModelsAPI, client.models)
    response = models_api.generate_content(
        model=model,
        contents=prompt,
        config=_genai_types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=TRANSLATION_SCHEMA,
        ),
    )
    if response.text is None:
        raise ValueError("Gemini zwrocil pusta odpowiedz tekstowa.")
    return response.text


def parse_translation(raw: str) -> str:
    """Wyciąga pole translation z odpowiedzi; ValueError gdy brak."""
    data = json.loads(raw)
    if not isinstance(data, dict) or not isinstance(data.get("translation"), str):
        raise ValueError(f"Odpowiedź bez pola 'translation': {raw[:200]}")
    return data["translation"]
