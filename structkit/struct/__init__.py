from .segment_tree import InvalidRange, MaxTree, MinTree, SegmentTree, SumTree
