# -*- coding: utf-8 -*-
"""
文件IO模块
"""

from .binary_writer import BinaryWriter, BinaryFileWriter
from .binary_reader import BinaryReader
from .json_writer import JsonDocumentWriter, vector_to_json, quat_to_json

__all__ = [
    'BinaryWriter',
    'BinaryFileWriter',
    'BinaryReader',
    'JsonDocumentWriter',
    'vector_to_json',
    'quat_to_json',
]
