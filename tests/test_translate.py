"""Tests for translation: key rotation, title cache, resume (llm_query/)"""

import json

import httpx
import pytest
from google.genai import errors as genai_errors

from data_model.translated import passthrough_record
from llm_query.gemini import KeyRing, TranslationConfigError, is_retryable, parse_translation
from llm_query.honorifics import expand_honorifics, fix_translated_file
from llm_query.prompt import build_translation_prompt
from llm_query.translate import (
    Translator,
    load_translated,
    save_translated,
    translate_hadiths,
    write_passthrough,
)


def _rate_limited() -> genai_errors.ClientError:
    return genai_errors.ClientError(
        429, {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}}
    )


def _unavailable() -> genai_errors.ServerError:
    return genai_errors.ServerError(
        503, {"error": {"code": 503, "message": "Unavailable", "status": "UNAVAILABLE"}}
    )


def _bad_request() -> genai_errors.ClientError:
    return genai_errors.ClientError(
        400, {"error": {"code": 400, "message": "Bad request", "status": "INVALID_ARGUMENT"}}
    )


class FakeGemini:
    """Zwraca 'fa:<ostatnia linia promptu>'; opcjonalnie rzuca błędy z kolejki."""

    def __init__(self, failures=()):
        self.failures = list(failures)
        self.calls = []

    def __call__(self, api_key, model, prompt):
        self.calls.append((api_key, prompt))
        if self.failures:
            raise self.failures.pop(0)
        source = prompt.rsplit("---\n", 1)[-1]
        return json.dumps({"translation": f"fa:{source} "}, ensure_ascii=False)


def _translator(keys=("k1", "k2"), failures=()):
    sleeps = []
    fake = FakeGemini(failures)
    translator = Translator(KeyRing(list(keys)), model="m", generate=fake, sleep=sleeps.append)
    return translator, fake, sleeps


def _hadith(hid, title="باب", content="متن"):
    return {"vol": 1, "sec": 1, "pages": [1], "id": hid, "title": title,
            "ghael": "", "sanad": "", "content": content}


# ─── KeyRing ──────────────────────────────────────────────────────────────

class TestKeyRing:
    def test_requires_keys(self):
        with pytest.raises(TranslationConfigError):
            KeyRing([])

    def test_ignores_empty_keys(self):
        assert len(KeyRing(["", "a"])) == 1

    def test_attempt_budget(self):
        assert KeyRing(["a", "b"]).max_attempts == 6

    def test_rotation_and_full_cycle(self):
        ring = KeyRing(["a", "b", "c"])
        assert ring.record_failure(retryable=False) == 0.0
        assert ring.current == "b"
        ring.record_failure(retryable=False)
        assert ring.full_cycle_completed is False
        ring.record_failure(retryable=False)
        assert ring.current == "a"
        assert ring.full_cycle_completed is True

    def test_backoff_after_full_cycle(self):
        ring = KeyRing(["a", "b"])
        assert ring.record_failure(retryable=True) == 0.0
        # powrót do klucza 0 + drugi kolejny błąd 429
        assert ring.record_failure(retryable=True) == 8.0
        assert ring.consecutive_errors == 0

    def test_backoff_grows(self):
        ring = KeyRing(["a"])
        delays = [ring.record_failure(retryable=True) for _ in range(4)]
        assert delays == [0.0, 8.0, 0.0, 16.0]

    def test_success_resets(self):
        ring = KeyRing(["a"])
        ring.record_failure(retryable=True)
        ring.record_success()
        assert ring.consecutive_errors == 0
        assert ring.record_failure(retryable=True) == 0.0

    def test_other_errors_reset_count(self):
        ring = KeyRing(["a"])
        ring.record_failure(retryable=True)
        assert ring.record_failure(retryable=False) == 0.0
        assert ring.consecutive_errors == 0

    def test_retryable_classification(self):
        assert is_retryable(_rate_limited())
        assert is_retryable(_unavailable())
        assert not is_retryable(_bad_request())
        assert not is_retryable(ValueError("x"))


# ─── Translator ───────────────────────────────────────────────────────────

class TestTranslator:
    def test_translates(self):
        translator, fake, _ = _translator()
        assert translator.translate("متن") == "fa:متن "
        assert len(fake.calls) == 1

    def test_title_cache(self):
        translator, fake, _ = _translator()
        first = translator.translate("باب العقل", is_title=True)
        second = translator.translate("باب العقل", is_title=True)
        assert first == second
        assert len(fake.calls) == 1

    def test_content_not_cached(self):
        translator, fake, _ = _translator()
        translator.translate("متن")
        translator.translate("متن")
        assert len(fake.calls) == 2

    def test_rotates_key_on_error(self):
        translator, fake, _ = _translator(failures=[_rate_limited()])
        assert translator.translate("متن") == "fa:متن "
        assert [key for key, _ in fake.calls] == ["k1", "k2"]

    def test_malformed_response_retried(self):
        translator, fake, _ = _translator(failures=[ValueError("bad json")])
        assert translator.translate("متن") == "fa:متن "
        assert len(fake.calls) == 2

    def test_exhausted_returns_original(self):
        translator, fake, sleeps = _translator(keys=["k1"], failures=[_rate_limited()] * 3)
        assert translator.translate("متن", is_title=True) == "متن"
        assert len(fake.calls) == 3
        assert sleeps == [8.0]
        assert "متن" not in translator.title_cache

    def test_transport_error_rotates_key(self):
        translator, fake, _ = _translator(failures=[httpx.ConnectError("connection refused")])
        assert translator.translate("متن") == "fa:متن "
        assert [key for key, _ in fake.calls] == ["k1", "k2"]

    def test_timeouts_never_fatal(self):
        translator, fake, sleeps = _translator(keys=["k1"], failures=[httpx.ReadTimeout("timed out")] * 3)
        assert translator.translate("متن") == "متن"
        assert len(fake.calls) == 3
        assert sleeps == []

    def test_bracketed_text_in_messages(self):
        # komunikaty błędów i tekst źródłowy z nawiasami kwadratowymi
        failures = [ValueError("bad [/translation] field")] * 3
        translator, _, _ = _translator(keys=["k1"], failures=failures)
        assert translator.translate("[/b] متن") == "[/b] متن"

    def test_title_prompt_has_glossary(self):
        assert "Translation Helpers" in build_translation_prompt("باب", is_title=True)
        assert "Translation Helpers" not in build_translation_prompt("باب")


class TestParseTranslation:
    def test_valid(self):
        assert parse_translation('{"translation": "سلام"}') == "سلام"

    def test_missing_field(self):
        with pytest.raises(ValueError):
            parse_translation('{"text": "سلام"}')

    def test_not_json(self):
        with pytest.raises(ValueError):
            parse_translation("سلام")


# ─── Book translation and resume ──────────────────────────────────────────

class TestTranslateHadiths:
    def test_writes_after_each_record(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        translator, _, _ = _translator()
        summary = translate_hadiths([_hadith("1"), _hadith("2", content="ثان")], out, translator)

        records = load_translated(out)
        assert summary.translated == 2
        assert [r["id"] for r in records] == ["1", "2"]
        assert records[0]["title_fa"] == "fa:باب"
        assert records[1]["content_fa"] == "fa:ثان"
        assert records[0]["content"] == "متن"

    def test_resume_skips_existing(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        done = {**_hadith("1"), "title_fa": "قديم", "content_fa": "قديم"}
        save_translated([done], out)

        translator, fake, _ = _translator()
        summary = translate_hadiths([_hadith("1"), _hadith("2", title="آخر")], out, translator)

        assert summary.skipped_existing == 1
        assert summary.translated == 1
        assert len(fake.calls) == 2
        records = load_translated(out)
        assert records[0] == done
        assert [r["id"] for r in records] == ["1", "2"]

    def test_empty_content_skipped(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        translator, fake, _ = _translator()
        summary = translate_hadiths([_hadith("1", content="  ")], out, translator)

        assert summary.skipped_empty == 1
        assert fake.calls == []
        assert not out.exists()

    def test_shared_title_translated_once(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        translator, fake, _ = _translator()
        translate_hadiths([_hadith("1", content="أ"), _hadith("2", content="ب")], out, translator)

        title_calls = [p for _, p in fake.calls if "Translation Helpers" in p]
        assert len(title_calls) == 1
        assert len(fake.calls) == 3

    def test_corrupt_checkpoint_is_fatal(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        out.write_text("[{", encoding="utf-8")
        translator, _, _ = _translator()
        with pytest.raises(json.JSONDecodeError):
            translate_hadiths([_hadith("1")], out, translator)


class TestPassthrough:
    def test_record(self):
        record = passthrough_record(_hadith("1", title="باب", content="متن"))
        assert (record["title"], record["content"]) == ("", "")
        assert (record["title_fa"], record["content_fa"]) == ("باب", "متن")

    def test_file(self, tmp_path):
        out = tmp_path / "hadiths_translated.json"
        assert write_passthrough([_hadith("1"), _hadith("2", content="")], out) == 2
        assert [r["content_fa"] for r in load_translated(out)] == ["متن", ""]


# ─── Honorifics ───────────────────────────────────────────────────────────

class TestHonorifics:
    def test_expand(self):
        text, count = expand_honorifics("پیامبر (ص) و امام (ع) و امام (ع)")
        assert text == "پیامبر (صلوات الله علیه) و امام (علیه السلام) و امام (علیه السلام)"
        assert count == 3

    def test_fix_file(self, tmp_path):
        path = tmp_path / "hadiths_translated.json"
        save_translated([{"id": "1", "content_fa": "امام (ع) فرمود"}], path)
        assert fix_translated_file(path) == 1
        assert load_translated(path)[0]["content_fa"] == "امام (علیه السلام) فرمود"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            fix_translated_file(tmp_path / "missing.json")
