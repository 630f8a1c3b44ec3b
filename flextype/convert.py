import datetime as _datetime
import numbers as _numbers
import numpy as _np
import math as _math

from typing import Any, Union

from .common import UNDEFINED, small_json
from .inference import is_nan, parse_literal

CODE_SPACE = 0x110000

_INFINITIES = { 'Infinity': _math.inf, '+Infinity': _math.inf, '-Infinity': -_math.inf }

def to_string(value: Any) -> str:
    '''
    Renders a value as text the way it would read in a loosely-typed payload.

    Booleans are `true`/`false`, `None` is `null`, `UNDEFINED` is `undefined`,
    non-finite floats are `NaN`/`Infinity`/`-Infinity`, and integral floats drop their `.0`.
    Lists, dicts, and numpy arrays are rendered as compact JSON.
    '''
    if value is None: return 'null'
    if value is UNDEFINED: return 'undefined'
    if isinstance(value, (bool, _np.bool_)): return 'true' if value else 'false'
    if isinstance(value, (float, _np.floating)):
        if _math.isnan(value): return 'NaN'
        if _math.isinf(value): return 'Infinity' if value > 0 else '-Infinity'
        vf = float(value)
        return str(int(vf)) if vf.is_integer() else str(vf)
    if isinstance(value, (list, dict, _np.ndarray)): return small_json(value)
    return str(value)

def to_number(value: Any) -> Union[int, float, _numbers.Number]:
    '''
    Converts a value to a number.

    Numbers are returned unchanged, booleans become `1`/`0`, `None` becomes `0`, and `UNDEFINED` becomes NaN.
    Strings are parsed after trimming: blank is `0`, `Infinity`/`-Infinity` are accepted, and anything else unparseable is NaN.
    Dates become POSIX timestamps. Every other value is NaN.
    '''
    if value is None: return 0
    if value is UNDEFINED: return _math.nan
    if isinstance(value, (bool, _np.bool_)): return 1 if value else 0
    if isinstance(value, (_numbers.Number, _np.number)): return value
    if isinstance(value, str):
        text = value.strip()
        if text == '': return 0
        if text in _INFINITIES: return _INFINITIES[text]
        res = parse_literal(text)
        return _math.nan if res is None else res
    if isinstance(value, _datetime.datetime): return value.timestamp()
    if isinstance(value, _datetime.date): return _datetime.datetime.combine(value, _datetime.time()).timestamp()
    return _math.nan

def to_boolean(value: Any) -> bool:
    '''
    Converts a value to a boolean using python truthiness, except that NaN and `UNDEFINED` are false
    and numpy arrays are true when non-empty.
    '''
    if is_nan(value): return False
    if isinstance(value, _np.ndarray): return value.size > 0
    return bool(value)

def shift_chars(text: str, offset: int) -> str:
    '''
    Shifts every code point of `text` by `offset`.

    Results wrap modulo `CODE_SPACE` (0x110000, the size of the unicode code space),
    so the output is always a valid python string and shifting back by `-offset` restores the input exactly.
    The output may contain lone surrogates (U+D800 to U+DFFF), which python strings can hold but most codecs reject.
    '''
    return ''.join(chr((ord(ch) + offset) % CODE_SPACE) for ch in text)
