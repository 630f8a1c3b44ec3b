import datetime
import collections
import re

import pytest

from flextype import UNDEFINED, create_typed


@pytest.fixture
def config_object():
    """A JSON object string holding a nested array."""
    return create_typed("config", '{"items": [1], "name": "demo"}')


@pytest.fixture
def numbers():
    """A JSON array string."""
    return create_typed("numbers", "[1, 2, 3]")


@pytest.fixture
def flag():
    """A raw boolean."""
    return create_typed("flag", True)


@pytest.fixture
def greeting():
    """A plain string that does not coerce."""
    return create_typed("greeting", "hello")


@pytest.fixture
def tagged_samples():
    """Raw values paired with the tag they infer as."""
    return [
        (None, "null"),
        (UNDEFINED, "undefined"),
        (float("nan"), "nan"),
        ([1, 2], "array"),
        (datetime.date(2024, 1, 2), "date"),
        (datetime.datetime(2024, 1, 2, 3, 4), "date"),
        (re.compile("a+"), "regexp"),
        (collections.OrderedDict(a=1), "map"),
        ({1, 2}, "set"),
        (frozenset(), "set"),
        ({"a": 1}, "object"),
        ((1, 2), "object"),
        (object(), "object"),
        ("text", "string"),
        (3, "number"),
        (2.5, "number"),
        (True, "boolean"),
    ]
