import random

import pytest

from word_games.domain import CompoundWord, WordPair
from word_games.services.config_loader import set_runtime_config


class FakeClock:
    def __init__(self, start=100.0):
        self.t = start

    def __call__(self):
        return self.t

    def advance(self, dt):
        self.t += dt


class DictStore:
    """テスト用の SessionStore 実装。"""

    def __init__(self):
        self.data = {}

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return DictStore()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def word_pool():
    words = [
        ("apple", "elma"),
        ("book", "kitap"),
        ("water", "su"),
        ("house", "ev"),
        ("friend", "arkadaş"),
        ("school", "okul"),
        ("tree", "ağaç"),
    ]
    return [WordPair(id=i, prompt=en, answer=tr) for i, (en, tr) in enumerate(words)]


@pytest.fixture
def compound_words():
    return [
        CompoundWord(0, "butter", "fly", "butterfly", "tereyağı", "uçmak", "kelebek"),
        CompoundWord(1, "sun", "flower", "sunflower", "güneş", "çiçek", "ayçiçeği"),
        CompoundWord(2, "rain", "bow", "rainbow", "yağmur", "yay", "gökkuşağı"),
    ]


@pytest.fixture(autouse=True)
def _reset_runtime_config():
    set_runtime_config(None)
    yield
    set_runtime_config(None)
