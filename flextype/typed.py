import collections.abc as _abc
import operator as _operator
import copy as _copy
import math as _math

from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Union

from .common import UNDEFINED, InvalidArgument, LockViolation, TypeMismatch, UnsupportedOperator
from .inference import Tag, infer_type, coerce, is_nan, parse_literal
from .options import LockOptions, lock_options
from .convert import to_string, to_number, to_boolean, shift_chars

DEFAULT_NAME = 'unknown'
LITERAL_NAME = 'literal'

def _float_div(a: Any, b: Any) -> Any:
    if b != 0: return a / b
    if a == 0 or is_nan(a): return _math.nan
    return _math.inf if a > 0 else -_math.inf

_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    '+': _operator.add,
    '-': _operator.sub,
    '*': _operator.mul,
    '/': _float_div,
}

def _saturating_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        return _math.inf if value > 0 else -_math.inf

def _apply(operator: str, a: Any, b: Any) -> Any:
    op = _OPERATORS.get(operator)
    if op is None:
        raise UnsupportedOperator(operator)
    try:
        return op(a, b)
    except OverflowError:
        # redo the operation in floats, where out-of-range ints become signed infinities
        return op(_saturating_float(a), _saturating_float(b))

def _math_operand(value: Any) -> Any:
    return to_number(value) if value is None or value is UNDEFINED else value

def _clamp_unit(value: Any) -> Any:
    if is_nan(value): return value
    return max(0, min(1, value))

class _Operand(NamedTuple):
    value: Any
    name: str

def _operand(other: Any) -> _Operand:
    if isinstance(other, TypedValue): return _Operand(other.value, other.name)
    return _Operand(other, LITERAL_NAME)

def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, TypedValue) else value

def _parse_index(idx: Any) -> Any:
    if isinstance(idx, str):
        res = parse_literal(idx.strip())
        if type(res) is int: return res
    return idx

def _lookup(container: Any, prop: Any) -> Any:
    if isinstance(container, _abc.Mapping):
        if isinstance(prop, _abc.Hashable) and prop in container: return container[prop]
        return container.get(str(prop), UNDEFINED)
    if isinstance(container, _abc.Sequence):
        idx = _parse_index(prop)
        if type(idx) is not int or not -len(container) <= idx < len(container): return UNDEFINED
        return container[idx]
    return getattr(container, str(prop), UNDEFINED)

def _store(container: Any, prop: Any, value: Any) -> None:
    if isinstance(container, _abc.MutableMapping):
        if not isinstance(prop, _abc.Hashable):
            raise InvalidArgument(f'object keys must be hashable, got {type(prop)}')
        container[prop] = value
    elif isinstance(container, _abc.MutableSequence):
        idx = _parse_index(prop)
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise InvalidArgument(f'array index must be an integer, got {prop!r}')
        if idx < -len(container):
            raise InvalidArgument(f'array index {idx} is out of range for an array of length {len(container)}')
        if idx < len(container):
            container[idx] = value
        else:
            for _ in range(len(container), idx):
                container.append(UNDEFINED)
            container.append(value)
    else:
        setattr(container, str(prop), value)

class TypedValue:
    '''
    A wrapped value with an inferred type tag.

    On construction the value is classified (see `infer_type`) and coerced once (see `coerce`):
    strings holding booleans, numbers, or JSON become the corresponding python values unless a lock forbids it.
    The results are cached, and every `type` the value held along the way is recorded in `type_history`.

    Lock toggles, math, `char_shift`, `get`, and the `to_*_value` conversions all return new instances.
    `set` and `push` are the exception: they mutate the wrapped list/dict in place and return `self`.
    Instances wrapping the same container (e.g. several `get()` results of one parent) see each other's mutations;
    pass `deep_copy = True` to give an instance its own copy of the raw value instead.
    '''
    def __init__(self, value: Any = UNDEFINED, name: str = DEFAULT_NAME, options: Union[LockOptions, Mapping[str, Any], None] = None, *, deep_copy: bool = False):
        if deep_copy:
            value = _copy.deepcopy(value)

        self.__initial_value = value
        self.__name = name
        self.__options = lock_options(options)
        self.__deep_copy = deep_copy

        raw_type = infer_type(value)
        self.__history: List[str] = [raw_type]
        self.__value, self.__type = coerce(raw_type, value, self.__options)
        if self.__type != raw_type:
            self.__history.append(self.__type)

    def __rebuild(self, options: LockOptions) -> 'TypedValue':
        return TypedValue(self.__initial_value, self.__name, options, deep_copy = self.__deep_copy)

    def with_string_lock(self) -> 'TypedValue':
        '''
        Returns a copy of this variable rebuilt from its raw value with `string_lock` set.
        '''
        return self.__rebuild(self.__options.replace(string_lock = True))
    def with_bool_lock(self) -> 'TypedValue':
        '''
        Returns a copy of this variable rebuilt from its raw value with `bool_lock` set.
        '''
        return self.__rebuild(self.__options.replace(bool_lock = True))
    def with_type_lock(self) -> 'TypedValue':
        '''
        Returns a copy of this variable rebuilt from its raw value with `type_lock` set.
        '''
        return self.__rebuild(self.__options.replace(type_lock = True))
    def unlock(self) -> 'TypedValue':
        '''
        Returns a copy of this variable rebuilt from its raw value with all locks cleared.
        '''
        return self.__rebuild(LockOptions())

    @property
    def value(self) -> Any:
        return self.__value
    @property
    def type(self) -> str:
        return self.__type
    @property
    def name(self) -> str:
        return self.__name
    @property
    def initial_value(self) -> Any:
        return self.__initial_value
    @property
    def options(self) -> LockOptions:
        return self.__options
    @property
    def type_history(self) -> List[str]:
        return list(self.__history)
    @property
    def is_locked(self) -> bool:
        return self.__options.is_locked

    def is_string(self) -> bool:
        return self.__type == Tag.STRING
    def is_number(self) -> bool:
        return self.__type == Tag.NUMBER
    def is_boolean(self) -> bool:
        return self.__type == Tag.BOOLEAN
    def is_array(self) -> bool:
        return self.__type == Tag.ARRAY
    def is_object(self) -> bool:
        return self.__type == Tag.OBJECT
    def is_null(self) -> bool:
        return self.__type == Tag.NULL
    def is_undefined(self) -> bool:
        return self.__type == Tag.UNDEFINED

    def debug(self) -> Dict[str, Any]:
        '''
        Returns a snapshot of the variable's state.
        The history and options are copies, but list/dict values are returned by reference.
        '''
        return {
            'name': self.__name,
            'value': self.__value,
            'type': self.__type,
            'type_history': list(self.__history),
            'options': self.__options.as_dict(),
            'is_locked': self.is_locked,
        }

    def _math_operation(self, operator: str, other: Any) -> 'TypedValue':
        '''
        Applies `operator` to this value and `other` and wraps the result in a new, unlocked variable.
        `None` operands count as `0` and `UNDEFINED` as NaN; results too large for a float become signed infinities.
        '''
        right = _operand(other)

        if self.__options.string_lock and self.is_string():
            raise LockViolation(self.__name, 'be used in mathematical operations')

        bool_math = self.__options.bool_lock and self.is_boolean()
        left = (1 if self.__value else 0) if bool_math else self.__value

        result = _apply(operator, _math_operand(left), _math_operand(right.value))
        if bool_math:
            result = _clamp_unit(result)

        return TypedValue(result, f'({self.__name} {operator} {right.name})')

    def add(self, other: Any) -> 'TypedValue':
        return self._math_operation('+', other)
    def subtract(self, other: Any) -> 'TypedValue':
        return self._math_operation('-', other)
    def multiply(self, other: Any) -> 'TypedValue':
        return self._math_operation('*', other)
    def divide(self, other: Any) -> 'TypedValue':
        '''
        Divides by `other`. Dividing by zero gives NaN for a zero (or NaN) dividend
        and an infinity with the dividend's sign otherwise; it never raises.
        '''
        return self._math_operation('/', other)

    def __add__(self, other: Any) -> 'TypedValue':
        return self.add(other)
    def __sub__(self, other: Any) -> 'TypedValue':
        return self.subtract(other)
    def __mul__(self, other: Any) -> 'TypedValue':
        return self.multiply(other)
    def __truediv__(self, other: Any) -> 'TypedValue':
        return self.divide(other)

    def char_shift(self, offset: int) -> 'TypedValue':
        '''
        Returns a new variable holding this string with every code point shifted by `offset` (see `shift_chars`).
        The result is inferred afresh, so shifting can produce a string that coerces to a number, boolean, or JSON.
        '''
        if not self.is_string():
            raise TypeMismatch('char_shift', Tag.STRING, self.__type)
        if self.__options.string_lock:
            raise LockViolation(self.__name, 'use char_shift')

        offset = _operator.index(offset)
        return TypedValue(shift_chars(self.__value, offset), f'charShift({self.__name}, {offset})')

    def __require(self, operation: str, *tags: str) -> None:
        if self.__type not in tags:
            raise TypeMismatch(operation, tags, self.__type)

    def get(self, prop: Any) -> 'TypedValue':
        '''
        Returns a new variable wrapping the item at `prop` (a key for objects, an index for arrays).
        Missing keys and out-of-range indices give an `undefined` variable.
        The result shares any list/dict it wraps with this variable.
        '''
        self.__require('get', Tag.ARRAY, Tag.OBJECT)
        return TypedValue(_lookup(self.__value, prop), f'{self.__name}.{prop}', deep_copy = self.__deep_copy)

    def set(self, prop: Any, value: Any) -> 'TypedValue':
        '''
        Stores `value` at `prop` in the wrapped array/object in place and returns this variable.
        Setting an index past the end of an array pads the gap with `UNDEFINED`.
        Non-integer indices and negative indices before the start of the array raise `InvalidArgument`.
        '''
        self.__require('set', Tag.ARRAY, Tag.OBJECT)
        _store(self.__value, prop, _unwrap(value))
        return self

    def push(self, *items: Any) -> 'TypedValue':
        '''
        Appends `items` to the wrapped array in place and returns this variable.
        '''
        self.__require('push', Tag.ARRAY)
        self.__value.extend(_unwrap(x) for x in items)
        return self

    def to_string_value(self) -> 'TypedValue':
        return TypedValue(to_string(self.__value), f'String({self.__name})')
    def to_number_value(self) -> 'TypedValue':
        return TypedValue(to_number(self.__value), f'Number({self.__name})')
    def to_boolean_value(self) -> 'TypedValue':
        return TypedValue(to_boolean(self.__value), f'Boolean({self.__name})')

    def __repr__(self) -> str:
        return f'TypedValue(name={self.__name!r}, type={self.__type!r}, value={self.__value!r})'

def create_typed(name: str, value: Any = UNDEFINED, options: Union[LockOptions, Mapping[str, Any], None] = None, *, deep_copy: bool = False, **locks: Any) -> TypedValue:
    '''
    Creates a new named variable.
    Locks can be given as `options` (a `LockOptions` or a mapping) and/or as keyword flags,
    for instance `create_typed('port', '8080', string_lock = True)`.
    '''
    if not isinstance(name, str):
        raise InvalidArgument('Variable name must be a string')
    return TypedValue(value, name, lock_options(options, **locks), deep_copy = deep_copy)

def create_typed_batch(variables: Mapping[str, Any], options: Union[LockOptions, Mapping[str, Any], None] = None, *, deep_copy: bool = False, **locks: Any) -> Dict[str, TypedValue]:
    '''
    Creates one variable per entry of `variables`, named by its key, all sharing the same locks.

    ```
    env = create_typed_batch({ 'debug': 'false', 'port': '8080' })
    env['port'].value # 8080
    ```
    '''
    if not isinstance(variables, Mapping):
        raise InvalidArgument(f'variables must be a mapping, got {type(variables)}')
    opts = lock_options(options, **locks)
    return { name: create_typed(name, value, opts, deep_copy = deep_copy) for name, value in variables.items() }
