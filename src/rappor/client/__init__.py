"""Client-side RAPPOR encoding: Bloom filter, PRR and IRR."""

from __future__ import annotations

from .bits import (
    MAC_DIGEST_SIZE,
    MAX_BITS,
    MAX_HASHES,
    Bits,
    bits_to_bitarray,
    bits_to_bytes,
    bits_to_indices,
    bits_to_string,
    bytes_to_bits,
    count_ones,
    to_big_endian,
)
from .capabilities import (
    BaseHashFunction,
    BaseIrrRand,
    BaseMacFunction,
    HmacSha256,
    Md5Hash,
    Mmh3Hash,
    NumpyIrrRand,
    SystemIrrRand,
    Xxh128Hash,
    create_hash_function,
    register_hash,
)
from .deps import Deps
from .encoder import EncodedReport, Encoder
from .errors import (
    EncodingError,
    HashOutputError,
    InvalidConfigurationError,
    MacOutputError,
    RandomSourceError,
)
from .factory import create_encoder
from .params import Params, check_valid_probability, validate_params

__all__ = [
    "Bits",
    "MAX_BITS",
    "MAX_HASHES",
    "MAC_DIGEST_SIZE",
    "to_big_endian",
    "bits_to_bytes",
    "bytes_to_bits",
    "bits_to_bitarray",
    "bits_to_indices",
    "bits_to_string",
    "count_ones",
    "BaseHashFunction",
    "BaseMacFunction",
    "BaseIrrRand",
    "Md5Hash",
    "Xxh128Hash",
    "Mmh3Hash",
    "HmacSha256",
    "NumpyIrrRand",
    "SystemIrrRand",
    "create_hash_function",
    "register_hash",
    "Params",
    "validate_params",
    "check_valid_probability",
    "Deps",
    "Encoder",
    "EncodedReport",
    "create_encoder",
    "InvalidConfigurationError",
    "EncodingError",
    "HashOutputError",
    "MacOutputError",
    "RandomSourceError",
]
