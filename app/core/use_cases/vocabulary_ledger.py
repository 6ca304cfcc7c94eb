# app/core/use_cases/vocabulary_ledger.py
import time
import structlog
from typing import Callable, Dict, Iterable, List, Optional

from app.core.domain.models import (
    MatchStatus,
    RankedWords,
    TranslationHistoryItem,
    VocabularyItem,
    WordItem,
)
from app.core.ports.key_value_store import IKeyValueStore

logger = structlog.get_logger()

WORDS_PREFIX = "words:"
HISTORY_PREFIX = "history:"

TOP_WORDS = 10
NEXT_WORDS = 50


def _now_ms() -> int:
    return int(time.time() * 1000)


class VocabularyLedger:
    """
    Word-frequency and history bookkeeping on top of the key-value store.

    Every translation event feeds its scored vocabulary in here. A win cools a
    word down, a lookup heats it up; the heat (`count`) drives the word cloud.
    """

    def __init__(self, store: IKeyValueStore, history_limit: int = 50,
                 clock: Callable[[], int] = _now_ms):
        self.store = store
        self.history_limit = history_limit
        self.clock = clock

    # --- Words ---

    async def get_words(self, lang: str) -> List[WordItem]:
        raw = await self.store.get(f"{WORDS_PREFIX}{lang}") or []
        return [WordItem(**entry) for entry in raw]

    async def save_vocabulary(self, items: Iterable[VocabularyItem], lang: str) -> List[WordItem]:
        """
        Merges scored vocabulary into the word records of `lang`.

        The merge runs inside one atomic store update, so concurrent
        translation events for the same language never drop each other's words.
        Returns the full, updated word list.
        """
        items = list(items)
        if not items:
            return await self.get_words(lang)

        now = self.clock()

        def merge(raw: Optional[List[dict]]) -> List[dict]:
            word_map: Dict[str, WordItem] = {}
            for entry in raw or []:
                word = WordItem(**entry)
                word_map[word.word.lower()] = word

            for item in items:
                key = item.word.lower()
                # Single letters are noise from the extractor
                if len(key) <= 1:
                    continue

                observed_form = item.original_form or item.word
                existing = word_map.get(key)

                if existing is None:
                    existing = WordItem(
                        word=item.word,
                        translation=item.translation or None,
                        phonetics=item.phonetics or None,
                    )
                    word_map[key] = existing
                else:
                    existing.translation = existing.translation or item.translation or None
                    existing.phonetics = existing.phonetics or item.phonetics or None

                if item.status == MatchStatus.WIN:
                    existing.wins += 1
                else:
                    existing.lookups += 1
                existing.count = max(0, existing.lookups - existing.wins)

                if observed_form.lower() != existing.word.lower() and observed_form not in existing.used_forms:
                    existing.used_forms.append(observed_form)

                existing.last_used = now

            return [w.model_dump(mode="json") for w in word_map.values()]

        stored = await self.store.update(f"{WORDS_PREFIX}{lang}", merge)
        words = [WordItem(**entry) for entry in stored]
        logger.info("vocabulary_saved", lang=lang, items=len(items), total_words=len(words))
        return words

    async def ranked_words(self, lang: str) -> RankedWords:
        """Active words (heat > 0), hottest first: top 10 and the next 50."""
        active = [w for w in await self.get_words(lang) if w.count > 0]
        ordered = sorted(active, key=lambda w: w.count, reverse=True)
        top = ordered[:TOP_WORDS]
        return RankedWords(
            top=top,
            next=ordered[TOP_WORDS:TOP_WORDS + NEXT_WORDS],
            max_count=top[0].count if top else 1,
        )

    # --- History ---

    async def get_history(self, lang: str) -> List[TranslationHistoryItem]:
        raw = await self.store.get(f"{HISTORY_PREFIX}{lang}") or []
        return [TranslationHistoryItem(**entry) for entry in raw]

    async def save_history_item(self, item: TranslationHistoryItem) -> List[TranslationHistoryItem]:
        """Prepends `item` to its language's history, newest first, capped."""
        def prepend(raw: Optional[List[dict]]) -> List[dict]:
            history = [item.model_dump(mode="json")] + (raw or [])
            return history[:self.history_limit]

        stored = await self.store.update(f"{HISTORY_PREFIX}{item.target_lang}", prepend)
        return [TranslationHistoryItem(**entry) for entry in stored]

    # --- Maintenance ---

    async def clear_all(self) -> int:
        """Deletes every word list and history log. Returns the number of keys removed."""
        keys = await self.store.keys(WORDS_PREFIX) + await self.store.keys(HISTORY_PREFIX)
        for key in keys:
            await self.store.delete(key)
        logger.warning("ledger_cleared", keys=len(keys))
        return len(keys)
