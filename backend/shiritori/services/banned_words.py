import json
import logging
import os
import tempfile
import threading
from typing import Iterable, List

from shiritori.errors import DuplicateBannedWord, InvalidBannedWord, PersistFailure

logger = logging.getLogger(__name__)


def _clean(entries: Iterable) -> List[str]:
    """Drop non-string and blank entries, collapse duplicates keeping order."""
    seen = set()
    words = []
    for entry in entries:
        if not isinstance(entry, str) or not entry.strip():
            continue
        if entry in seen:
            continue
        seen.add(entry)
        words.append(entry)
    return words


class BannedWordStore:
    """Forbidden substrings, loaded once and persisted on every addition.

    The file holds a single record, ``{"bannedWords": [...]}``, read whole at
    startup and rewritten whole by :meth:`add`.
    """

    def __init__(self, path: str):
        self.path = path
        self._words: List[str] = []
        self._lock = threading.Lock()

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def load(self) -> List[str]:
        """Read the store file. Any failure leaves the store empty."""
        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
            entries = data['bannedWords']
            if not isinstance(entries, list):
                raise TypeError(f"bannedWords must be a list, got {type(entries).__name__}")
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning(f"[banned-words-load-failed] path={self.path} error={exc!r}")
            self._words = []
            return self.words
        self._words = _clean(entries)
        logger.info(f"[banned-words-loaded] path={self.path} count={len(self._words)}")
        return self.words

    def contains(self, text: str) -> bool:
        lowered = text.lower()
        return any(word.lower() in lowered for word in self._words)

    def add(self, word: str) -> str:
        if not isinstance(word, str) or not word.strip():
            raise InvalidBannedWord()
        with self._lock:
            # Exact match only; filtering via contains() ignores case
            if word in self._words:
                raise DuplicateBannedWord()
            self._words.append(word)
            try:
                self._persist()
            except OSError as exc:
                logger.error(f"[banned-words-persist-failed] path={self.path} word={word!r} error={exc!r}")
                raise PersistFailure() from exc
        logger.info(f"[banned-word-added] word={word!r} count={len(self._words)}")
        return word

    def _persist(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.banned_words.', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump({'bannedWords': self._words}, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
