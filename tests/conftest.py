import random

import pytest

from huffcodec.tree import HuffmanTree


@pytest.fixture
def sample_text():
    return b"aaabbc"


@pytest.fixture
def sample_tree(sample_text):
    return HuffmanTree.from_data(sample_text)


@pytest.fixture
def random_bytes():
    rng = random.Random(1234)
    return bytes(rng.getrandbits(8) for _ in range(4096))


@pytest.fixture
def english_like():
    return b"the quick brown fox jumps over the lazy dog, and then it sleeps. " * 40
