# tests\core\test_vocabulary_ledger.py
import asyncio

import pytest

from app.core.domain.models import (
    AppMode,
    MatchStatus,
    TranslationHistoryItem,
    VocabularyItem,
)
from app.adapters.persistence.filesystem_store import FileSystemKeyValueStore
from app.core.use_cases.vocabulary_ledger import VocabularyLedger


def _item(word, status=MatchStatus.LOOKUP, form="", **kwargs):
    return VocabularyItem(word=word, original_form=form, status=status, **kwargs)


def _history(n, lang="it"):
    return TranslationHistoryItem(
        id=str(n), timestamp=n, mode=AppMode.SPEAKING, target_lang=lang,
        original=f"text {n}", translation=f"testo {n}",
    )


@pytest.fixture
def ledger(memory_store):
    return VocabularyLedger(memory_store, history_limit=3, clock=lambda: 42)


@pytest.mark.asyncio
class TestSaveVocabulary:

    async def test_new_word_lookup(self, ledger):
        words = await ledger.save_vocabulary([_item("pivo", translation="birra")], "it")

        assert len(words) == 1
        assert words[0].lookups == 1
        assert words[0].wins == 0
        assert words[0].count == 1
        assert words[0].translation == "birra"
        assert words[0].last_used == 42

    async def test_new_word_win_has_no_heat(self, ledger):
        words = await ledger.save_vocabulary([_item("quattro", MatchStatus.WIN)], "it")
        assert words[0].wins == 1
        assert words[0].count == 0

    async def test_heat_is_lookups_minus_wins(self, ledger):
        await ledger.save_vocabulary([_item("birra")], "it")
        await ledger.save_vocabulary([_item("birra")], "it")
        words = await ledger.save_vocabulary([_item("Birra", MatchStatus.WIN)], "it")

        assert len(words) == 1
        assert (words[0].lookups, words[0].wins, words[0].count) == (2, 1, 1)

    async def test_heat_never_negative(self, ledger):
        await ledger.save_vocabulary([_item("ciao", MatchStatus.WIN)], "it")
        words = await ledger.save_vocabulary([_item("ciao", MatchStatus.WIN)], "it")
        assert words[0].count == 0

    async def test_used_forms_recorded_once(self, ledger):
        await ledger.save_vocabulary([_item("andare", form="vado")], "it")
        await ledger.save_vocabulary([_item("andare", form="vado")], "it")
        words = await ledger.save_vocabulary([_item("andare", form="Andare")], "it")

        assert words[0].used_forms == ["vado"]

    async def test_single_letters_ignored(self, ledger):
        words = await ledger.save_vocabulary([_item("e"), _item("ok")], "it")
        assert [w.word for w in words] == ["ok"]

    async def test_existing_translation_kept(self, ledger):
        await ledger.save_vocabulary([_item("pane", translation="chléb")], "it")
        words = await ledger.save_vocabulary(
            [_item("pane", translation="pečivo", phonetics="pane")], "it"
        )
        assert words[0].translation == "chléb"
        assert words[0].phonetics == "pane"

    async def test_languages_are_separate(self, ledger):
        await ledger.save_vocabulary([_item("hola")], "es")
        assert await ledger.get_words("it") == []
        assert [w.word for w in await ledger.get_words("es")] == ["hola"]

    async def test_empty_batch_returns_current_words(self, ledger):
        await ledger.save_vocabulary([_item("sole")], "it")
        words = await ledger.save_vocabulary([], "it")
        assert [w.word for w in words] == ["sole"]


@pytest.mark.asyncio
class TestRankedWords:

    async def test_hottest_first_and_inactive_dropped(self, ledger):
        await ledger.save_vocabulary([_item("uno"), _item("due"), _item("tre", MatchStatus.WIN)], "it")
        await ledger.save_vocabulary([_item("due")], "it")

        ranked = await ledger.ranked_words("it")

        assert [w.word for w in ranked.top] == ["due", "uno"]
        assert ranked.next == []
        assert ranked.max_count == 2

    async def test_split_top_ten(self, ledger):
        await ledger.save_vocabulary([_item(f"parola{i}") for i in range(15)], "it")

        ranked = await ledger.ranked_words("it")

        assert len(ranked.top) == 10
        assert len(ranked.next) == 5

    async def test_no_words(self, ledger):
        ranked = await ledger.ranked_words("it")
        assert ranked.top == []
        assert ranked.max_count == 1


@pytest.mark.asyncio
class TestHistory:

    async def test_newest_first_and_capped(self, ledger):
        for n in range(5):
            await ledger.save_history_item(_history(n))

        history = await ledger.get_history("it")
        assert [h.id for h in history] == ["4", "3", "2"]

    async def test_clear_all(self, ledger, memory_store):
        await ledger.save_vocabulary([_item("ciao")], "it")
        await ledger.save_history_item(_history(1))
        await memory_store.set("profile", {"avatar": "x"})

        removed = await ledger.clear_all()

        assert removed == 2
        assert await ledger.get_words("it") == []
        assert await ledger.get_history("it") == []
        assert await memory_store.get("profile") == {"avatar": "x"}


@pytest.mark.asyncio
class TestConcurrentEvents:

    @pytest.fixture
    def file_ledger(self, tmp_path):
        store = FileSystemKeyValueStore(base_path=str(tmp_path / "store"))
        return VocabularyLedger(store, history_limit=10, clock=lambda: 42)

    async def test_overlapping_saves_keep_both_words(self, file_ledger):
        await asyncio.gather(
            file_ledger.save_vocabulary([_item("quattro")], "it"),
            file_ledger.save_vocabulary([_item("birra")], "it"),
        )

        words = await file_ledger.get_words("it")
        assert sorted(w.word for w in words) == ["birra", "quattro"]

    async def test_overlapping_saves_of_one_word_add_up(self, file_ledger):
        await asyncio.gather(*[
            file_ledger.save_vocabulary([_item("birra")], "it") for _ in range(5)
        ])

        words = await file_ledger.get_words("it")
        assert words[0].lookups == 5

    async def test_overlapping_history_items_are_all_kept(self, file_ledger):
        await asyncio.gather(*[file_ledger.save_history_item(_history(n)) for n in range(4)])

        history = await file_ledger.get_history("it")
        assert sorted(h.id for h in history) == ["0", "1", "2", "3"]
