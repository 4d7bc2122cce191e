"""Template data values."""

__all__ = [
    "Value",
    "Undefined",
    "Null",
    "Bool",
    "Int",
    "Float",
    "Text",
    "List",
    "Dict",
    "UNDEFINED",
    "NULL",
    "index",
    "key",
    "truthy",
    "render",
    "equals",
    "to_python",
    "validate",
]

import decimal
import math
import operator

import soydata


_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INT64_SPAN = 1 << 64


class Value:
    """Template data value.

    Every value is exactly one of the variants defined in this module:
    Undefined, Null, Bool, Int, Float, Text, List and Dict. No other kinds
    exist, and the module level operations `truthy`, `render` and `equals`
    handle each of them.

    Values are normally created with `soydata.lift` from native Python data,
    or directly from literals with the variant constructors. The contents of
    a value are considered immutable once constructed. List and Dict values
    are shared by reference between all their holders, and compare equal only
    to themselves.

    The Python protocols map onto the template operations; `bool()` uses
    truthiness, `str()` renders, and `==` uses template equality.
    """
    __slots__ = ()

    def __bool__(self):
        return truthy(self)

    def __str__(self):
        return render(self)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return equals(self, other)

    def __hash__(self):
        match self:
            case Undefined() | Null():
                return hash(type(self))
            case Int():
                # Must agree with Float for numerically equal values
                return hash(float(self.value))
            case Float():
                return hash(self.value)
            case Bool() | Text():
                return hash((type(self), self.value))
            case List():
                return id(self._items)
            case Dict():
                return id(self._entries)
        raise TypeError(f"Unknown value type: {type(self).__name__}")


class Undefined(Value):
    """Absence of a value, like an unresolved variable or a missing key."""
    __slots__ = ()

    def __repr__(self):
        return "Undefined()"


class Null(Value):
    """Explicit null value."""
    __slots__ = ()

    def __repr__(self):
        return "Null()"


class Bool(Value):
    """Boolean value."""
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = bool(value)

    def __repr__(self):
        return f"Bool({self.value})"


class Int(Value):
    """Signed 64-bit integer value.

    Integers outside the signed 64-bit range are truncated on construction
    with two's complement wraparound, so `Int(2**64 - 1)` holds -1.

    Args:
        value: (int) Any integral number
    """
    __slots__ = ("value",)

    def __init__(self, value):
        value = operator.index(value)
        if not _INT64_MIN <= value <= _INT64_MAX:
            value = (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN
        self.value = value

    def __repr__(self):
        return f"Int({self.value})"


class Float(Value):
    """64-bit floating point value."""
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = float(value)

    def __repr__(self):
        return f"Float({self.value!r})"


class Text(Value):
    """Text value."""
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = _text(value)

    def __repr__(self):
        return f"Text({self.value!r})"


class List(Value):
    """Ordered sequence of values.

    The list owns its element storage. Two lists are equal only when they
    share the same storage; a list with identical contents built separately
    is a different list.

    Args:
        items: (iterable) Values for the list, in order
    """
    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items = list(items)

    def index(self, i):
        """Element at position `i`, or Undefined if out of bounds."""
        if not 0 <= i < len(self._items):
            return UNDEFINED
        return self._items[i]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self):
        return f"List({self._items!r})"


class Dict(Value):
    """Mapping from text keys to values.

    Like List, a Dict owns its storage and compares equal only to a Dict
    sharing that storage.

    Args:
        entries: (Mapping | iterable) Text keys and their Values
    Raises:
        TypeError: If any key is not text
    """
    __slots__ = ("_entries",)

    def __init__(self, entries=None):
        if entries is None:
            entries = {}
        self._entries = {_text(k): v for k, v in dict(entries).items()}

    def key(self, k):
        """Value bound to key `k`, or Undefined if missing."""
        return self._entries.get(k, UNDEFINED)

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, k):
        return k in self._entries

    def __repr__(self):
        return f"Dict({self._entries!r})"


UNDEFINED = Undefined()
NULL = Null()


def index(value, i):
    """Element of a List at position `i`, or Undefined if out of bounds."""
    return value.index(i)


def key(value, k):
    """Value of a Dict under key `k`, or Undefined if it doesn't exist."""
    return value.key(k)


def truthy(value):
    """Interpret a value as a boolean for template conditionals.

    Undefined, Null, false, zero and empty text are falsy. Lists and dicts
    are always truthy, even when empty.

    Args:
        value: (Value) Value to test
    Returns:
        (bool) Truthiness of the value
    """
    match value:
        case Undefined() | Null():
            return False
        case Bool():
            return value.value
        case Int():
            return value.value != 0
        case Float():
            # NaN is unequal to zero and stays truthy
            return value.value != 0.0
        case Text():
            return value.value != ""
        case List() | Dict():
            return True
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def render(value):
    """Format a value as text for display in a template.

    Dict entries are rendered in key order.

    Args:
        value: (Value) Value to render
    Returns:
        (str) Rendered text
    Raises:
        RenderError: If the value is Undefined
    """
    match value:
        case Undefined():
            raise soydata.RenderError("Attempted to render undefined value as text")
        case Null():
            return "null"
        case Bool():
            return "true" if value.value else "false"
        case Int():
            return str(value.value)
        case Float():
            return _format_float(value.value)
        case Text():
            return value.value
        case List():
            return "[" + ", ".join(render(item) for item in value) + "]"
        case Dict():
            fields = [f"{k}: {render(value.key(k))}" for k in sorted(value.keys())]
            return "{" + ", ".join(fields) + "}"
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def equals(a, b):
    """Compare two values with template equality.

    Primitives compare by value, with Int and Float comparable to each
    other as floating point. Lists and dicts are only equal to the same
    instance. Any other pairing is unequal.

    Args:
        a: (Value) Left hand value
        b: (Value) Right hand value
    Returns:
        (bool) True if the values are equal
    """
    match a:
        case Undefined():
            return isinstance(b, Undefined)
        case Null():
            return isinstance(b, Null)
        case Bool():
            return isinstance(b, Bool) and a.value == b.value
        case Text():
            return isinstance(b, Text) and a.value == b.value
        case Int():
            if isinstance(b, Int):
                return a.value == b.value
            return isinstance(b, Float) and float(a.value) == b.value
        case Float():
            if isinstance(b, Float):
                return a.value == b.value
            return isinstance(b, Int) and a.value == float(b.value)
        case List():
            return isinstance(b, List) and a._items is b._items
        case Dict():
            return isinstance(b, Dict) and a._entries is b._entries
    raise TypeError(f"Unknown value type: {type(a).__name__}")


def to_python(value):
    """Convert a value back to plain Python data.

    Undefined and Null both become None. Lists and dicts are copied into new
    Python containers.

    Args:
        value: (Value) Value to convert
    Returns:
        (object) None, bool, int, float, str, list or dict
    """
    match value:
        case Undefined() | Null():
            return None
        case Bool() | Int() | Float() | Text():
            return value.value
        case List():
            return [to_python(item) for item in value]
        case Dict():
            return {k: to_python(v) for k, v in value.items()}
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def validate(value):
    """Validate that a Value tree is in a proper state.

    This isn't done when values are constructed, for efficiency. It can be
    used by tests or tools to detect values built with bad payloads.

    Args:
        value: (Value) object to check
    Raises:
        (TypeError) if any type of problem is found
    """
    match value:
        case Undefined() | Null():
            pass
        case Bool():
            if not isinstance(value.value, bool):
                raise TypeError(f"Invalid Bool payload {value.value!r}")
        case Int():
            if type(value.value) is not int or not _INT64_MIN <= value.value <= _INT64_MAX:
                raise TypeError(f"Invalid Int payload {value.value!r}")
        case Float():
            if type(value.value) is not float:
                raise TypeError(f"Invalid Float payload {value.value!r}")
        case Text():
            if type(value.value) is not str:
                raise TypeError(f"Invalid Text payload {value.value!r}")
        case List():
            for item in value:
                validate(item)
        case Dict():
            for k, v in value.items():
                if type(k) is not str:
                    raise TypeError(f"Invalid Dict key {k!r}")
                validate(v)
        case _:
            raise TypeError(f"Expected Value, got {type(value).__name__}")


def _text(value):
    """Plain str from a str or str subclass (enums included)."""
    if not isinstance(value, str):
        raise TypeError(f"Expected str, got {type(value).__name__}")
    return str.__str__(value)


def _format_float(num):
    """Shortest text that reads back as the same float.

    Uses positional notation unless the decimal exponent is below -4 or
    at least 6, where it switches to `1.5e+06` style.
    """
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "+Inf" if num > 0 else "-Inf"

    # repr has the shortest round trip digits, normalize drops trailing zeros
    sign, digits, exponent = decimal.Decimal(repr(num)).normalize().as_tuple()
    digits = "".join(map(str, digits))
    point = len(digits) + exponent
    sign = "-" if sign else ""

    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"
