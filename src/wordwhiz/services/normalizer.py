"""Normalization of raw thesaurus payloads into WordRecords.

Everything here is a pure function of its input: the same payload always
produces the same record.
"""
import json
import logging
import re
from typing import Any, Callable, Iterable, List, Tuple

from wordwhiz.errors import MalformedResponse, WordNotFound
from wordwhiz.models.word_models import WordRecord

logger = logging.getLogger(__name__)

# Fields of a structured example that may carry its text, in priority order
EXAMPLE_TEXT_FIELDS = ("t", "text", "example")

# Example cleanup passes, applied in order
_ITALICS = re.compile(r"\{/?(?:it|wi)\}")
_TEXT_WRAPPER = re.compile(r"\{t:|\}")
_ESCAPED_QUOTE = re.compile(r'\\"')
_BRACKETS_AND_QUOTES = re.compile(r'[\[\]"]+')
_WHITESPACE = re.compile(r"\s+")


def strip_italics(text: str) -> str:
    return _ITALICS.sub("", text)


def strip_text_wrapper(text: str) -> str:
    return _TEXT_WRAPPER.sub("", text)


def strip_escaped_quotes(text: str) -> str:
    return _ESCAPED_QUOTE.sub("", text)


def strip_brackets_and_quotes(text: str) -> str:
    return _BRACKETS_AND_QUOTES.sub("", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


EXAMPLE_CLEANUP_PASSES: Tuple[Callable[[str], str], ...] = (
    strip_italics,
    strip_text_wrapper,
    strip_escaped_quotes,
    strip_brackets_and_quotes,
    collapse_whitespace,
)


def clean_example_text(text: str) -> str:
    """Remove thesaurus markup from example text."""
    for cleanup in EXAMPLE_CLEANUP_PASSES:
        text = cleanup(text)
    return text


def extract_example_text(raw: Any) -> str:
    """Pull the text out of a raw example.

    A raw example can be a plain string, a JSON-encoded string, a mapping with
    a text-bearing field, or a list of any of these (joined with spaces).
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except ValueError:
            return raw
        # Strings that decode to scalars (numbers, true) are literal text
        if isinstance(decoded, (dict, list)) or (isinstance(decoded, str) and decoded != raw):
            return extract_example_text(decoded)
        return raw
    if isinstance(raw, dict):
        for name in EXAMPLE_TEXT_FIELDS:
            value = raw.get(name)
            if value:
                return extract_example_text(value)
        return json.dumps(raw, sort_keys=True)
    if isinstance(raw, (list, tuple)):
        parts = (extract_example_text(item) for item in raw)
        return " ".join(part for part in parts if part)
    return str(raw)


def normalize_examples(raw_examples: Iterable[Any]) -> Tuple[str, ...]:
    """Extract and clean each example, dropping the ones that end up empty."""
    examples = []
    for raw in raw_examples or ():
        text = clean_example_text(extract_example_text(raw))
        if text:
            examples.append(text)
    return tuple(examples)


def flatten_words(value: Any) -> Tuple[str, ...]:
    """Flatten one level of nesting from a synonym/antonym list."""
    if not isinstance(value, list):
        return ()
    words: List[str] = []
    for item in value:
        group = item if isinstance(item, list) else [item]
        for word in group:
            if word is not None and str(word):
                words.append(str(word))
    return tuple(words)


def _string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item is not None and str(item))


def _entry_examples(entry: dict) -> List[Any]:
    """Collect the raw 'vis' examples from the first definition's sense sequence."""
    definitions = entry.get("def")
    if not isinstance(definitions, list) or not definitions or not isinstance(definitions[0], dict):
        return []
    sseq = definitions[0].get("sseq")
    if not isinstance(sseq, list):
        return []

    examples = []
    for group in sseq:
        for item in group if isinstance(group, list) else [group]:
            if not isinstance(item, list) or len(item) < 2 or item[0] != "sense":
                continue
            sense = item[1] if isinstance(item[1], dict) else {}
            for text_item in sense.get("dt") or []:
                if isinstance(text_item, list) and len(text_item) > 1 and text_item[0] == "vis":
                    examples.append(text_item[1])
                    break
    return examples


def normalize_word_id(raw_id: Any) -> str:
    """Lowercase a thesaurus identifier and drop its homograph suffix ("bank:2")."""
    return str(raw_id).split(":", 1)[0].strip().lower()


def normalize_entry(entry: Any) -> WordRecord:
    """Build a WordRecord from a single thesaurus entry."""
    if not isinstance(entry, dict):
        raise MalformedResponse("Entry is not an object")
    meta = entry.get("meta") if isinstance(entry.get("meta"), dict) else {}
    raw_id = meta.get("id")
    if not raw_id:
        raise MalformedResponse("Missing word identifier in response")
    word = normalize_word_id(raw_id)
    if not word:
        raise MalformedResponse("Empty word identifier in response")

    raw_examples = _entry_examples(entry)
    if "examples" in entry and isinstance(entry["examples"], list):
        raw_examples = raw_examples + entry["examples"]

    return WordRecord(
        word=word,
        part_of_speech=str(entry.get("fl") or ""),
        definitions=_string_list(entry.get("shortdef")),
        synonyms=flatten_words(meta.get("syns")),
        antonyms=flatten_words(meta.get("ants")),
        examples=normalize_examples(raw_examples),
        date=str(entry.get("date") or ""),
        offensive=bool(meta.get("offensive", False)),
    )


def normalize_response(payload: Any) -> WordRecord:
    """Normalize a full API response, which is a list of entries.

    A list of plain strings is the thesaurus's way of saying the word was not
    found (the strings are spelling suggestions).
    """
    if isinstance(payload, str):
        raise WordNotFound(payload)
    if not isinstance(payload, list) or not payload:
        raise MalformedResponse("Expected a non-empty list of entries")
    entry = payload[0]
    if isinstance(entry, str):
        logger.debug(f"Word not found, suggestions: {payload[:5]}")
        raise WordNotFound(f"suggestions: {', '.join(str(s) for s in payload[:5])}")
    return normalize_entry(entry)
