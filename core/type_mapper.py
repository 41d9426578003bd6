
from enum import Enum
from typing import Tuple

class StorageClass(Enum):
    """SQLite storage classes a MySQL column can be declared as"""
    INTEGER = "INTEGER"
    TEXT = "TEXT"
    BLOB = "BLOB"
    REAL = "REAL"

class TypeMapper:
    # Ordered (substrings, storage class) rules; first match wins.
    # 'int' must stay ahead of 'char' and 'date': a type naming both is INTEGER.
    RULES: Tuple[Tuple[Tuple[str, ...], StorageClass], ...] = (
        (('int',), StorageClass.INTEGER),
        (('char', 'text'), StorageClass.TEXT),
        (('blob',), StorageClass.BLOB),
        (('float', 'double', 'decimal'), StorageClass.REAL),
        (('date', 'time', 'year'), StorageClass.TEXT),
    )

    DEFAULT: StorageClass = StorageClass.TEXT

    @classmethod
    def map_type(cls, source_type: str) -> StorageClass:
        """Map a MySQL column type string (e.g. 'varchar(255)') to a storage class"""
        normalized = (source_type or '').lower()
        for needles, storage_class in cls.RULES:
            if any(needle in normalized for needle in needles):
                return storage_class
        return cls.DEFAULT


def map_type(source_type: str) -> StorageClass:
    return TypeMapper.map_type(source_type)
