import numpy as _np
import json as _json

from typing import Any, Sequence, Union

class FlexTypeError(Exception):
    'An error from a flextype operation'
    pass

class InvalidArgument(FlexTypeError, TypeError):
    'A factory or option argument had the wrong type or an unknown name'
    pass

class LockViolation(FlexTypeError):
    '''
    A locked value was used in a way its locks forbid.
    The offending variable's name is available as `name`.
    '''
    def __init__(self, name: str, action: str):
        super().__init__(f'String locked variable \'{name}\' cannot {action}')
        self.name = name
        self.action = action

class TypeMismatch(FlexTypeError, TypeError):
    '''
    An operation was called on a value whose current type does not support it.
    `expected` holds the accepted type tags and `actual` the current one.
    '''
    def __init__(self, operation: str, expected: Union[str, Sequence[str]], actual: str):
        expected = (expected,) if isinstance(expected, str) else tuple(expected)
        super().__init__(f'{operation}() can only be used on {" or ".join(expected)} types. Current type: {actual}')
        self.operation = operation
        self.expected = expected
        self.actual = actual

class UnsupportedOperator(FlexTypeError, ValueError):
    'A math operation was dispatched with an operator that has no implementation'
    def __init__(self, operator: str):
        super().__init__(f'Unsupported operator: {operator}')
        self.operator = operator

class _Undefined:
    __slots__ = ()
    __instance = None

    def __new__(cls):
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __repr__(self) -> str:
        return 'UNDEFINED'
    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> '_Undefined':
        return self
    def __deepcopy__(self, memo) -> '_Undefined':
        return self
    def __reduce__(self) -> str:
        return 'UNDEFINED'

UNDEFINED = _Undefined()
'''
The absent value, distinct from `None`.
Looking up a missing key or index produces this, and it infers as `undefined`.
'''

def small_json(obj: Any) -> str:
    '''
    Renders a value as compact JSON.
    numpy arrays and scalars are converted to their python equivalents, and `UNDEFINED` becomes `null`.
    Anything else json cannot represent falls back to its `str()`.
    '''
    def prep_value(obj):
        if type(obj) in [list, tuple]:
            return [prep_value(x) for x in obj]
        if type(obj) is dict:
            return { k if isinstance(k, str) else str(k): prep_value(v) for k,v in obj.items() }
        if type(obj) is _np.ndarray:
            return obj.tolist()
        if isinstance(obj, _np.generic):
            return obj.item()
        if obj is UNDEFINED:
            return None
        return obj
    return _json.dumps(prep_value(obj), separators=(',', ':'), default = str)
