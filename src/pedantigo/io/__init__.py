"""JSON encoding and decoding helpers."""
