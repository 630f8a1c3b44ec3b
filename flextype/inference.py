import collections.abc as _abc
import collections as _collections
import datetime as _datetime
import decimal as _decimal
import logging as _logging
import numbers as _numbers
import numpy as _np
import json as _json
import math as _math
import re as _re

from typing import Any, Optional, Tuple, Union

from .common import UNDEFINED
from .options import LockOptions

_logger = _logging.getLogger(__name__)

class Tag:
    '''
    The closed set of type tags a `TypedValue` can report.
    '''
    NULL = 'null'
    UNDEFINED = 'undefined'
    NAN = 'nan'
    ARRAY = 'array'
    DATE = 'date'
    REGEXP = 'regexp'
    MAP = 'map'
    SET = 'set'
    OBJECT = 'object'
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'

    ALL = frozenset([NULL, UNDEFINED, NAN, ARRAY, DATE, REGEXP, MAP, SET, OBJECT, STRING, NUMBER, BOOLEAN])

def is_nan(value: Any) -> bool:
    if isinstance(value, (float, _np.floating)): return _math.isnan(value)
    if isinstance(value, _decimal.Decimal): return value.is_nan()
    return False

def infer_type(value: Any) -> str:
    '''
    Classifies a value into exactly one `Tag`.

    `bool` is checked before numbers since it is an `int` subclass.
    Ordered dicts and non-dict mappings are maps, plain dicts are objects,
    and anything not covered by a more specific tag is an object too.
    '''
    if value is None: return Tag.NULL
    if value is UNDEFINED: return Tag.UNDEFINED
    if isinstance(value, (bool, _np.bool_)): return Tag.BOOLEAN
    if isinstance(value, (_numbers.Number, _np.number)):
        return Tag.NAN if is_nan(value) else Tag.NUMBER
    if isinstance(value, str): return Tag.STRING

    if isinstance(value, _abc.MutableSequence): return Tag.ARRAY
    if isinstance(value, _datetime.date): return Tag.DATE
    if isinstance(value, _re.Pattern): return Tag.REGEXP
    if isinstance(value, _collections.OrderedDict): return Tag.MAP
    if isinstance(value, _abc.Mapping) and not isinstance(value, dict): return Tag.MAP
    if isinstance(value, _abc.Set): return Tag.SET
    return Tag.OBJECT

_DECIMAL_LITERAL = _re.compile(r'[+-]?(?:[0-9]+(?P<frac>\.[0-9]*)?|(?P<bare_frac>\.[0-9]+))(?P<exp>[eE][+-]?[0-9]+)?')
_RADIX_LITERAL = _re.compile(r'0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)')

def parse_literal(text: str) -> Optional[Union[int, float]]:
    '''
    Parses `text` if the whole of it is a numeric literal, otherwise returns `None`.

    Accepted forms are signed decimals with optional fraction and exponent (`42`, `-3.5`, `.5`, `1e3`)
    and unsigned hex, octal, and binary integers (`0x1A`, `0o17`, `0b101`).
    Decimals with neither fraction nor exponent become `int`, the rest `float`.
    Python-only spellings such as `1_000` or `inf` are not accepted.
    Decimal integers too long for `int()` to parse are returned as `float` (typically `inf`).
    '''
    if _RADIX_LITERAL.fullmatch(text):
        return int(text, 0)
    m = _DECIMAL_LITERAL.fullmatch(text)
    if m is None: return None
    if m['frac'] is None and m['bare_frac'] is None and m['exp'] is None:
        try:
            return int(text)
        except ValueError: # past the interpreter's int digit limit
            pass
    return float(text)

def parse_number(text: str) -> Optional[Union[int, float]]:
    '''
    Like `parse_literal`, but additionally rejects literals that overflow to infinity (e.g. `1e999`).
    '''
    res = parse_literal(text)
    if isinstance(res, float) and not _math.isfinite(res): return None
    return res

def _reject_constant(name: str) -> Any:
    raise ValueError(f'non-standard JSON constant {name}')

def _coerce_string(text: str, options: LockOptions) -> Tuple[Any, str]:
    if options.string_lock: return text, Tag.STRING

    trimmed = text.strip()
    if trimmed == '': return text, Tag.STRING

    lowered = trimmed.lower()
    if lowered == 'true' or lowered == 'false':
        _logger.debug('coerced %r to boolean', text)
        return lowered == 'true', Tag.BOOLEAN

    num = parse_number(trimmed)
    if num is not None:
        _logger.debug('coerced %r to number', text)
        return num, Tag.NUMBER

    if (trimmed.startswith('{') and trimmed.endswith('}')) or (trimmed.startswith('[') and trimmed.endswith(']')):
        try:
            parsed = _json.loads(trimmed, parse_constant = _reject_constant)
        except (ValueError, RecursionError) as e:
            _logger.debug('left %r as string, not valid JSON: %s', text, e)
            return text, Tag.STRING
        tag = Tag.ARRAY if isinstance(parsed, list) else Tag.OBJECT
        _logger.debug('coerced %r to %s', text, tag)
        return parsed, tag

    return text, Tag.STRING

def coerce(tag: str, value: Any, options: LockOptions) -> Tuple[Any, str]:
    '''
    Runs one coercion pass over a value that was inferred as `tag`.
    Returns the converted value and its tag, which differs from `tag` only when a string was converted.

    Strings may become booleans (`true`/`false`, any case), numbers (see `parse_number`),
    or JSON arrays/objects (when bracket-delimited and valid; invalid JSON is left as is).
    Booleans become `1`/`0` under `bool_lock`, but keep the `boolean` tag.
    Nothing is converted under `type_lock`.
    '''
    if options.type_lock: return value, tag

    if tag == Tag.STRING: return _coerce_string(value, options)
    if tag == Tag.BOOLEAN: return (1 if value else 0) if options.bool_lock else value, tag
    return value, tag
