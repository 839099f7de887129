from collections import Counter
from typing import Dict


def sample_frequencies(data: bytes) -> Dict[int, int]:
    # byte value -> occurrence count, only for bytes that actually occur
    return dict(Counter(data))


def frequency_total(table: Dict[int, int]) -> int:
    return sum(table.values())
