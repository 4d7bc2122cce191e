"""Convert native Python data into template values."""

__all__ = ["lift"]

import collections.abc
import dataclasses
import decimal
import enum
import io
import logging
import numbers
import sys
import types
import weakref

import soydata


log = logging.getLogger(__name__)

_STDLIB_MODULES = sys.stdlib_module_names | {"builtins"}

# Objects with attribute storage that are never records
_NOT_RECORDS = (type, types.ModuleType, enum.Enum, BaseException, io.IOBase)


def lift(native):
    """Convert native Python data into a Value tree.

    Conversion rules:
    - None → Null
    - weakref.ref → its referent, or Null once collected
    - objects with a `__soydata__()` method → whatever that method returns
    - existing Value → passed through unchanged
    - bool → Bool
    - int and other Integral types → Int (wrapped to 64 bits)
    - float, Decimal and other Real types → Float
    - str → Text
    - Mapping → Dict (keys must be str)
    - dataclasses, named tuples and instances of user defined classes →
      Dict of public fields (from `__slots__` or `__dict__`), with the first
      character of each field name lower-cased
    - list, tuple and other Sequence types → List

    Containers are converted recursively. There is no cycle detection, so
    self-referencing data never finishes converting.

    Args:
        native: Python data to convert
    Returns:
        (Value) Converted value
    Raises:
        LiftError: If a mapping has non-str keys, or the data has a type
            that has no Value equivalent
    """
    native = _deref(native)

    if native is None:
        return soydata.NULL
    if isinstance(native, soydata.Value):
        return native

    if isinstance(native, bool):
        return soydata.Bool(native)
    if isinstance(native, numbers.Integral):
        return soydata.Int(native)
    if isinstance(native, (numbers.Real, decimal.Decimal)):
        try:
            return soydata.Float(native)
        except (ValueError, OverflowError) as e:
            raise soydata.LiftError(f"Cannot convert {native!r} to Float: {e}") from e
    if isinstance(native, str):
        return soydata.Text(native)

    if isinstance(native, collections.abc.Mapping):
        return _lift_mapping(native)
    if _is_namedtuple(native):
        return _lift_record(native, native._fields)
    if isinstance(native, collections.abc.Sequence):
        return soydata.List([lift(item) for item in native])
    if dataclasses.is_dataclass(native) and not isinstance(native, type):
        return _lift_record(native, [f.name for f in dataclasses.fields(native)])
    names = _record_names(native)
    if names is not None:
        return _lift_record(native, names)

    raise soydata.LiftError(
        f"Cannot convert Python type {type(native).__name__} to Value: {native!r}"
    )


def _deref(native):
    """Strip weak references and `__soydata__` wrappers from native data."""
    while True:
        if isinstance(native, weakref.ref):
            native = native()
            if native is None:
                log.debug("Weak reference was collected, lifting as null")
        elif hasattr(type(native), "__soydata__"):
            native = native.__soydata__()
        else:
            return native


def _lift_mapping(native):
    entries = {}
    for k, v in native.items():
        if not isinstance(k, str):
            raise soydata.LiftError(
                f"Map keys must be str, got {type(k).__name__} key {k!r}"
            )
        entries[k] = lift(v)
    return soydata.Dict(entries)


def _lift_record(native, names):
    """Dict from the public fields of a record-like object."""
    entries = {}
    for name in names:
        if name.startswith("_"):
            log.debug("Skipping private field %s of %s", name, type(native).__name__)
            continue
        entries[name[:1].lower() + name[1:]] = lift(getattr(native, name))
    return soydata.Dict(entries)


def _is_namedtuple(native):
    return isinstance(native, tuple) and hasattr(type(native), "_fields")


def _record_names(native):
    """Field names of a user defined record object, or None if it isn't one.

    Only instances of classes defined outside the standard library count,
    so files, threads, enums and exceptions stay unsupported. Fields come
    from `__slots__` along the class hierarchy, then the instance `__dict__`.
    """
    cls = type(native)
    if isinstance(native, _NOT_RECORDS) or callable(native):
        return None
    if cls.__module__.partition(".")[0] in _STDLIB_MODULES:
        return None

    names = []
    for base in reversed(cls.__mro__):
        slots = base.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in names:
                continue
            if not hasattr(native, name):
                log.debug("Skipping unset field %s of %s", name, cls.__name__)
                continue
            names.append(name)
    if hasattr(native, "__dict__"):
        names.extend(name for name in vars(native) if name not in names)
    elif not names:
        return None
    return names
