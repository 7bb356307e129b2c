"""
Genome Codec Module

This module converts genomes (vectors of float64 weights and biases) to raw bytes
and to a compact textual code, and back.

Every value is encoded as 8 bytes of little-endian IEEE-754 double precision,
independently of the platform's native byte order. The textual code is the
lowercase hexadecimal representation of those bytes, 2 characters per byte.

Functions:
    to_bytes(genome):  Encode a genome as raw bytes
    from_bytes(data):  Decode raw bytes into a genome
    to_code(genome):   Encode a genome as a hexadecimal code
    from_code(code):   Decode a hexadecimal code into a genome
"""

import re
from typing import Sequence

import numpy as np

# Explicit byte order, never the native one
GENE_DTYPE = np.dtype('<f8')

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]*')

def to_bytes(genome: Sequence[float]) -> bytes:
    return np.asarray(genome, dtype=GENE_DTYPE).tobytes()

def from_bytes(data: bytes) -> np.ndarray:
    """
    Decode raw bytes into a genome.

    Parameters:
        data: Bytes as produced by 'to_bytes'

    Returns:
        A new float64 array in native byte order

    Raises:
        ValueError: if the byte count is not a multiple of 8
    """
    if len(data) % GENE_DTYPE.itemsize != 0:
        raise ValueError(f"Byte count must be a multiple of {GENE_DTYPE.itemsize}, got {len(data)}")

    return np.frombuffer(data, dtype=GENE_DTYPE).astype(np.float64)

def to_code(genome: Sequence[float]) -> str:
    return to_bytes(genome).hex()

def from_code(code: str) -> np.ndarray:
    """
    Decode a hexadecimal genome code.

    Parameters:
        code: A string of hexadecimal digits with an even length

    Returns:
        The decoded genome

    Raises:
        ValueError: if the code has an odd length, contains a non-hex
                    character, or does not hold a whole number of values
    """
    if len(code) % 2 != 0:
        raise ValueError("Genome code has to be of a length divisible by 2")

    if not _HEX_PATTERN.fullmatch(code):
        raise ValueError("Genome code is not a series of hexadecimal digits")

    return from_bytes(bytes.fromhex(code))
