from .coding import EncodedPayload, compression_ratio, decode, encode
from .container import compress, decompress, is_compressed, read_header, verify_roundtrip
from .errors import (HuffmanError, MalformedContainer, MalformedPayload, MalformedTree,
                     SymbolNotInTable, TruncatedPayload, WeightOverflow)
from .frequency import sample_frequencies
from .tree import HuffmanTree, Internal, Leaf, build_tree, make_codes
from .treecodec import deserialize, serialize, serialized_size

__version__ = "0.1.0"
