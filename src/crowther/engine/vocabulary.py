"""Map a word to the code it stands for."""

from .world import VocabularyEntry, World


def resolve(world: World, word: str) -> VocabularyEntry | None:
    """Scan the vocabulary in feed order; the first entry spelled ``word`` wins.

    Several words share a code (synonyms), and a few words appear twice
    with different codes: ``ROCK`` is a motion word before it is an
    object, so motion wins. Returns ``None`` for an unknown word.
    """
    for entry in world.vocabulary:
        if entry.word == word:
            return entry
    return None
