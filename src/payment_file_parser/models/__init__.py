"""Data models and structures"""

from .core import (
    DerivedField,
    FieldSpec,
    FixedWidthField,
    ParserConfig,
    ProcessingResult,
    Row,
    Table,
)
from .field_specs import (
    AD_PAYMENT_FIELDS,
    CFONB_FIELDS,
    FIELD_SPECS,
    MT101_FIELDS,
    PACS008_FIELDS,
)

__all__ = [
    'AD_PAYMENT_FIELDS',
    'CFONB_FIELDS',
    'DerivedField',
    'FIELD_SPECS',
    'FieldSpec',
    'FixedWidthField',
    'MT101_FIELDS',
    'PACS008_FIELDS',
    'ParserConfig',
    'ProcessingResult',
    'Row',
    'Table',
]
