from structkit.struct import InvalidRange, MaxTree, MinTree, SegmentTree, SumTree

__version__ = "0.1.0"
