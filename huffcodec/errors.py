"""Exceptions raised by the Huffman codec.

Everything derives from ``HuffmanError``, itself a ``ValueError``, so code
that only cares about "bad data" can keep catching ``ValueError``.
"""


class HuffmanError(ValueError):
    pass


class SymbolNotInTable(HuffmanError, KeyError):
    """A byte to encode has no code in the tree it is encoded with."""

    def __init__(self, symbol: int):
        self.symbol = symbol
        super().__init__(f"Symbol {symbol} has no code in this tree")

    def __str__(self):
        # KeyError would repr() the message otherwise
        return self.args[0]


class MalformedTree(HuffmanError):
    pass


class TruncatedPayload(HuffmanError):
    pass


class MalformedPayload(HuffmanError):
    pass


class MalformedContainer(HuffmanError):
    pass


class WeightOverflow(HuffmanError):
    pass
