"""
Genotype Package

This package implements the portable representation of genomes, the flat vectors
of all weights and biases of a network. Genomes are encoded as little-endian
float64 bytes, and as a lowercase hexadecimal code for display and exchange.

Modules:
    codec: Conversion between genomes, bytes and hexadecimal codes

Exported Functions:
    to_bytes:   Encode a genome as raw bytes
    from_bytes: Decode raw bytes into a genome
    to_code:    Encode a genome as a hexadecimal code
    from_code:  Decode a hexadecimal code into a genome
"""

from evodrive.genotype.codec import to_bytes, from_bytes, to_code, from_code

__all__ = ['to_bytes',
           'from_bytes',
           'to_code',
           'from_code']
