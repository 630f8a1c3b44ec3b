import pytest
from gelidum import FrozenException

import flextype
from flextype import (
    FlexTypeError,
    InvalidArgument,
    LockOptions,
    LockViolation,
    TypeMismatch,
    UnsupportedOperator,
    create_typed,
    create_typed_batch,
    lock_options,
)


def test_error_hierarchy():
    for cls in (InvalidArgument, LockViolation, TypeMismatch, UnsupportedOperator):
        assert issubclass(cls, FlexTypeError)
    assert issubclass(InvalidArgument, TypeError)
    assert issubclass(TypeMismatch, TypeError)
    assert issubclass(UnsupportedOperator, ValueError)


def test_create_typed_requires_string_name():
    with pytest.raises(InvalidArgument) as info:
        create_typed(5, "x")
    assert str(info.value) == "Variable name must be a string"


def test_create_typed_accepts_options_in_several_forms():
    assert create_typed("x", "1", LockOptions(string_lock=True)).value == "1"
    assert create_typed("x", "1", {"string_lock": True}).value == "1"
    assert create_typed("x", "1", {"stringLock": True}).value == "1"
    assert create_typed("x", "1", string_lock=True).value == "1"
    assert create_typed("x", "1", {"string_lock": True}, string_lock=False).value == 1


def test_unknown_options_are_rejected():
    with pytest.raises(InvalidArgument):
        create_typed("x", 1, {"strict": True})
    with pytest.raises(InvalidArgument):
        create_typed("x", 1, frozen=True)
    with pytest.raises(InvalidArgument):
        create_typed("x", 1, ["string_lock"])


def test_batch_preserves_keys_and_shares_options():
    env = create_typed_batch({"debug": "FALSE", "port": "8080", "tags": '["a"]', "name": "svc"})
    assert list(env) == ["debug", "port", "tags", "name"]
    assert env["debug"].value is False
    assert env["port"].value == 8080
    assert env["tags"].value == ["a"]
    assert env["name"].name == "name"

    locked = create_typed_batch({"a": "1", "b": "true"}, string_lock=True)
    assert [v.value for v in locked.values()] == ["1", "true"]
    assert all(v.options.string_lock for v in locked.values())


def test_batch_validation():
    assert create_typed_batch({}) == {}
    with pytest.raises(InvalidArgument):
        create_typed_batch([("a", 1)])
    with pytest.raises(InvalidArgument):
        create_typed_batch({1: "a"})


def test_lock_options_are_frozen():
    opts = LockOptions(bool_lock=True)
    with pytest.raises(FrozenException):
        opts.bool_lock = False
    assert opts.bool_lock


def test_lock_options_replace_and_merge():
    opts = LockOptions()
    changed = opts.replace(type_lock=True)
    assert changed is not opts
    assert changed.as_dict() == {"string_lock": False, "bool_lock": False, "type_lock": True}
    assert not opts.type_lock
    assert changed.is_locked
    assert lock_options(changed, typeLock=False) == LockOptions()
    assert lock_options() == LockOptions()
    assert hash(LockOptions(string_lock=True)) == hash(lock_options({"string_lock": 1}))


def test_package_exports_version():
    assert isinstance(flextype.__version__, str)
