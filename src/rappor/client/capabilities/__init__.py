"""Hash, MAC and randomness collaborators for the encoder."""

from .base import BaseHashFunction, BaseIrrRand, BaseMacFunction
from .hash_impl import HmacSha256, Md5Hash, Mmh3Hash, Xxh128Hash
from .rand_impl import NumpyIrrRand, SystemIrrRand, mask_from_generator
from .registry import (
    create_hash_function,
    get_hash_class,
    register_hash,
    registered_hashes,
)

__all__ = [
    "BaseHashFunction",
    "BaseMacFunction",
    "BaseIrrRand",
    "Md5Hash",
    "Xxh128Hash",
    "Mmh3Hash",
    "HmacSha256",
    "NumpyIrrRand",
    "SystemIrrRand",
    "mask_from_generator",
    "register_hash",
    "get_hash_class",
    "create_hash_function",
    "registered_hashes",
]
