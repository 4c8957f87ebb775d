"""symhuff: binary matrix codec (symmetry reduction + Huffman coding)."""

from symhuff.pipeline import EncodeResult, decode_pipeline, encode_matrix_text, encode_pipeline

__version__ = "0.1.0"

__all__ = ["EncodeResult", "decode_pipeline", "encode_matrix_text", "encode_pipeline", "__version__"]
