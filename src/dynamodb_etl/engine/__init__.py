"""Recoding engine: field recoders and the line pipeline."""

from dynamodb_etl.engine.pipeline import LinePipeline
from dynamodb_etl.engine.recoder import BinaryRecoder, RecordRecoder, TextRecoder

__all__ = [
    "BinaryRecoder",
    "LinePipeline",
    "RecordRecoder",
    "TextRecoder",
]
