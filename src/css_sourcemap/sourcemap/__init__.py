"""Sourcemap model, VLQ codec, identity generation and merging."""

from css_sourcemap.sourcemap.identity import generate_identity_sourcemap
from css_sourcemap.sourcemap.merge import concat_sourcemaps, fold_sourcemaps
from css_sourcemap.sourcemap.model import SourceMap
from css_sourcemap.sourcemap.vlq import (
    Segment,
    decode_mappings,
    decode_vlq,
    encode_mappings,
    encode_vlq,
)

__all__ = [
    "Segment",
    "SourceMap",
    "concat_sourcemaps",
    "decode_mappings",
    "decode_vlq",
    "encode_mappings",
    "encode_vlq",
    "fold_sourcemaps",
    "generate_identity_sourcemap",
]
