import gelidum as _gelidum

from typing import Any, Dict, Mapping, Union

from .common import InvalidArgument

FLAGS = ('string_lock', 'bool_lock', 'type_lock')

# camelCase spellings of the flags
_ALIASES = { 'stringLock': 'string_lock', 'boolLock': 'bool_lock', 'typeLock': 'type_lock' }

def _flag_name(key: Any) -> str:
    name = _ALIASES.get(key, key)
    if name not in FLAGS:
        raise InvalidArgument(f'unknown lock option {key!r}, expected one of {", ".join(FLAGS)}')
    return name

class LockOptions:
    '''
    The lock flags of a `TypedValue`.

     - `string_lock` keeps strings as strings and forbids using them as math operands or shifting them
     - `bool_lock` stores booleans as `1`/`0` and clamps math on them to `[0, 1]`
     - `type_lock` disables coercion entirely

    Options are frozen once constructed; derive new ones with `replace()`.
    '''
    def __init__(self, string_lock: bool = False, bool_lock: bool = False, type_lock: bool = False):
        self.string_lock = bool(string_lock)
        self.bool_lock = bool(bool_lock)
        self.type_lock = bool(type_lock)
        _gelidum.freeze(self, on_freeze = 'inplace')

    @property
    def is_locked(self) -> bool:
        return self.string_lock or self.bool_lock or self.type_lock

    def replace(self, **changes: Any) -> 'LockOptions':
        '''
        Returns a new set of options with the given flags overridden.
        Flags not mentioned keep their current value.
        '''
        return self.merged(changes)

    def merged(self, changes: Mapping[str, Any]) -> 'LockOptions':
        flags = self.as_dict()
        for key, value in changes.items():
            flags[_flag_name(key)] = value
        return LockOptions(**flags)

    def as_dict(self) -> Dict[str, bool]:
        return { name: getattr(self, name) for name in FLAGS }

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LockOptions): return NotImplemented
        return self.as_dict() == other.as_dict()
    def __hash__(self) -> int:
        return hash((self.string_lock, self.bool_lock, self.type_lock))

    def __repr__(self) -> str:
        return f'LockOptions(string_lock={self.string_lock}, bool_lock={self.bool_lock}, type_lock={self.type_lock})'

DEFAULT_OPTIONS = LockOptions()

def lock_options(options: Union[LockOptions, Mapping[str, Any], None] = None, **flags: Any) -> LockOptions:
    '''
    Normalizes the ways options can be given into a `LockOptions`.
    `options` may be `None`, an existing `LockOptions`, or a mapping of flag names to values;
    keyword flags are applied on top of it.
    '''
    if options is None:
        base = DEFAULT_OPTIONS
    elif isinstance(options, LockOptions):
        base = options
    elif isinstance(options, Mapping):
        base = DEFAULT_OPTIONS.merged(options)
    else:
        raise InvalidArgument(f'options must be a LockOptions or a mapping, got {type(options)}')

    return base.merged(flags) if flags else base
