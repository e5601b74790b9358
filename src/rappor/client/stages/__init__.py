"""The three RAPPOR encoding stages: Bloom filter, PRR, IRR."""

from .bloom import bloom_hash_input, make_bloom_filter
from .irr import make_irr
from .prr import get_prr_masks, make_prr, prr_threshold

__all__ = [
    "bloom_hash_input",
    "make_bloom_filter",
    "get_prr_masks",
    "make_prr",
    "prr_threshold",
    "make_irr",
]
