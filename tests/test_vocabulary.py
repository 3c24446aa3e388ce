import pytest

from core.grammar import WordCategory
from systems.vocabulary import VocabularyTable


@pytest.fixture
def table():
    return VocabularyTable.default()


@pytest.mark.parametrize("word,category,canonical", [
    ("take", WordCategory.VERB, "TAKE"),
    ("Get", WordCategory.VERB, "TAKE"),
    ("x", WordCategory.VERB, "EXAMINE"),
    ("n", WordCategory.DIRECTION, "NORTH"),
    ("upstairs", WordCategory.DIRECTION, "UP"),
    ("into", WordCategory.PREPOSITION, "IN"),
    ("the", WordCategory.ARTICLE, "THE"),
    ("it", WordCategory.PRONOUN, "IT"),
    ("everything", WordCategory.PRONOUN, "ALL"),
])
def test_default_words(table, word, category, canonical):
    assert table.classify(word) is category
    assert table.expand(word) == canonical


def test_unknown_word(table):
    assert table.classify("xyzzy") is WordCategory.UNKNOWN
    assert table.expand("xyzzy") == "XYZZY"
    assert "xyzzy" not in table


def test_expand_is_idempotent(vocabulary):
    for word in vocabulary.words():
        once = vocabulary.expand(word)
        assert vocabulary.expand(once) == once, word


def test_every_spelling_has_one_category(vocabulary):
    categories = [c for c in WordCategory if c is not WordCategory.UNKNOWN]
    for word in vocabulary.words():
        owners = [c for c in categories if word in vocabulary.words(c)]
        assert owners == [vocabulary.classify(word)], word


def test_extended_returns_new_table(table):
    bigger = table.extended(nouns={"LAMP": ["LANTERN"]}, adjectives=["BRASS"])

    assert bigger is not table
    assert bigger.classify("lantern") is WordCategory.NOUN
    assert bigger.expand("lantern") == "LAMP"
    assert bigger.classify("brass") is WordCategory.ADJECTIVE
    assert table.classify("lamp") is WordCategory.UNKNOWN
    assert len(bigger) == len(table) + 3


def test_first_registration_wins(table):
    bigger = table.extended(nouns={"TAKE": [], "NORTH": []}, adjectives=["LAMP", "THE"])

    assert bigger.classify("take") is WordCategory.VERB
    assert bigger.classify("north") is WordCategory.DIRECTION
    assert bigger.classify("the") is WordCategory.ARTICLE
    assert bigger.classify("lamp") is WordCategory.ADJECTIVE


def test_noun_before_adjective_in_one_extension(table):
    bigger = table.extended(nouns={"GOLD": []}, adjectives=["GOLD"])

    assert bigger.classify("gold") is WordCategory.NOUN


def test_synonym_of_foreign_canonical_stands_alone(table):
    # TAKE is a verb, so the noun group cannot point at it
    bigger = table.extended(nouns={"TAKE": ["TAKING"]})

    assert bigger.classify("taking") is WordCategory.NOUN
    assert bigger.expand("taking") == "TAKING"


def test_verbatim_verbs(table):
    assert table.is_verbatim_verb("say")
    assert table.is_verbatim_verb("utter")
    assert not table.is_verbatim_verb("take")
    assert not table.is_verbatim_verb("xyzzy")


def test_extended_verbs_and_verbatim(table):
    bigger = table.extended(verbs={"XYZZY": ["PLUGH"]}, verbatim_verbs=["XYZZY"])

    assert bigger.expand("plugh") == "XYZZY"
    assert bigger.is_verbatim_verb("plugh")
    assert not table.is_verbatim_verb("xyzzy")


def test_classify_words_numbers_positions(table):
    tokens = table.classify_words(["take", "the", "xyzzy"])

    assert [t.position for t in tokens] == [0, 1, 2]
    assert [t.category for t in tokens] == [WordCategory.VERB, WordCategory.ARTICLE, WordCategory.UNKNOWN]
    assert tokens[2].text == "xyzzy"
    assert tokens[2].canonical == "XYZZY"


def test_tokens_are_immutable(table):
    token = table.token("take")
    with pytest.raises(AttributeError):
        token.category = WordCategory.NOUN


def test_build_from_groups():
    table = VocabularyTable.build({
        WordCategory.NOUN: {"BOX": ["CRATE"]},
        WordCategory.VERB: {"OPEN": []},
    })

    assert table.words() == ["BOX", "CRATE", "OPEN"]
    assert table.words(WordCategory.VERB) == ["OPEN"]
