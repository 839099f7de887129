from typing import Dict, Mapping

import pandas as pd

from .tree import HuffmanTree, iter_leaves

COMPRESS_TIMINGS = {
    "Read File": "time_read",
    "Build Tree": "time_tree_build",
    "Encode & Pack": "time_pack",
    "Serialize Tree": "time_serialize",
    "Write File": "time_write",
    "Total": "time_total",
}

DECOMPRESS_TIMINGS = {
    "Read File": "time_read",
    "Rebuild & Decode": "time_decode",
    "Rewrite file": "time_write",
    "Total": "time_total",
}


def timings_frame(stats: Mapping[str, object], labels: Dict[str, str]) -> pd.DataFrame:
    # steps missing from stats (skipped runs) show as 0
    rows = [(label, stats.get(key) or 0.0) for label, key in labels.items()]
    return pd.DataFrame(rows, columns=["Step", "Time (s)"])


def code_table_frame(tree: HuffmanTree) -> pd.DataFrame:
    codes = tree.codes
    rows = []
    for leaf in iter_leaves(tree.root):
        code = codes[leaf.symbol]
        rows.append((leaf.symbol, leaf.weight, code.to01(), len(code)))
    df = pd.DataFrame(rows, columns=["Symbol", "Count", "Code", "Bits"])
    return df.sort_values(["Bits", "Symbol"], ignore_index=True)
