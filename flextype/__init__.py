'''
Loosely-typed value wrapping: infers a type for raw input, coerces stringly-typed data
(booleans, numbers, JSON) into python values, and guards math/string/collection operations with opt-in locks
'''

import logging as _logging

from .common import FlexTypeError, InvalidArgument, LockViolation, TypeMismatch, UnsupportedOperator, UNDEFINED
from .options import LockOptions, lock_options
from .inference import Tag, infer_type, coerce, parse_number
from .convert import to_string, to_number, to_boolean, shift_chars
from .typed import TypedValue, create_typed, create_typed_batch

from importlib import metadata as _metadata

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

try:
    __version__ = _metadata.version('flextype')
except _metadata.PackageNotFoundError: # running from a source checkout
    __version__ = '0.0.0'
__author__ = 'FlexType contributors'
