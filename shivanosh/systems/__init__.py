"""Compression backends."""

from shivanosh.systems.compression import BEST_COMPRESSION, CompressionCodec, ZlibCodec

__all__ = ["BEST_COMPRESSION", "CompressionCodec", "ZlibCodec"]
