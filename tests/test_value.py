"""Test the value variants and their accessors."""

import copy

import pytest
import soydata


def test_singletons():
    """Undefined and Null singletons are their own variants."""
    assert isinstance(soydata.UNDEFINED, soydata.Undefined)
    assert isinstance(soydata.NULL, soydata.Null)
    assert not isinstance(soydata.UNDEFINED, soydata.Null)
    assert soydata.UNDEFINED != soydata.NULL


def test_int_wraps_to_64_bits():
    """Integers outside signed 64-bit range wrap around."""
    assert soydata.Int(2**63 - 1).value == 2**63 - 1
    assert soydata.Int(-2**63).value == -2**63
    assert soydata.Int(2**63).value == -2**63
    assert soydata.Int(2**64 - 1).value == -1
    assert soydata.Int(2**64 + 5).value == 5


def test_int_rejects_float():
    with pytest.raises(TypeError):
        soydata.Int(1.5)


def test_text_requires_str():
    with pytest.raises(TypeError):
        soydata.Text(3)


def test_dict_requires_str_keys():
    with pytest.raises(TypeError):
        soydata.Dict({1: soydata.Int(1)})


class TestAccessors:
    """Index and key lookups never fail, missing data is Undefined."""

    def test_index_in_range(self):
        lst = soydata.List([soydata.Int(10), soydata.Int(20)])
        assert soydata.index(lst, 0).value == 10
        assert lst.index(1).value == 20

    @pytest.mark.parametrize("i", [2, 5, -1, -3])
    def test_index_out_of_range(self, i):
        lst = soydata.List([soydata.Int(10), soydata.Int(20)])
        result = soydata.index(lst, i)
        assert isinstance(result, soydata.Undefined)
        assert not soydata.truthy(result)

    def test_index_empty(self):
        assert isinstance(soydata.List().index(0), soydata.Undefined)

    def test_key_present(self):
        d = soydata.Dict({"a": soydata.Int(1)})
        assert soydata.key(d, "a").value == 1
        assert d.key("a").value == 1

    def test_key_missing(self):
        d = soydata.Dict({"a": soydata.Int(1)})
        result = soydata.key(d, "missing")
        assert isinstance(result, soydata.Undefined)
        assert not soydata.truthy(result)

    def test_key_bound_to_null(self):
        """A key bound to null is Null, not Undefined."""
        d = soydata.Dict({"a": soydata.NULL})
        assert isinstance(d.key("a"), soydata.Null)


def test_container_protocols():
    """Lists and dicts expose read-only container access."""
    lst = soydata.List([soydata.Int(1), soydata.Text("a")])
    assert len(lst) == 2
    assert [v.value for v in lst] == [1, "a"]

    d = soydata.Dict({"x": soydata.Int(1), "y": soydata.Int(2)})
    assert len(d) == 2
    assert "x" in d
    assert "z" not in d
    assert sorted(d) == ["x", "y"]
    assert sorted(d.keys()) == ["x", "y"]
    assert {k: v.value for k, v in d.items()} == {"x": 1, "y": 2}


def test_list_copies_input():
    """Changing the source list doesn't change a constructed List."""
    items = [soydata.Int(1)]
    lst = soydata.List(items)
    items.append(soydata.Int(2))
    assert len(lst) == 1


def test_python_protocols():
    """bool, str and == follow template semantics."""
    assert not soydata.Int(0)
    assert soydata.List([])
    assert str(soydata.Float(2.5)) == "2.5"
    assert soydata.Int(3) == soydata.Float(3.0)
    assert soydata.Int(3) != soydata.Text("3")
    assert soydata.Int(3) != 3


def test_hash_agrees_with_equality():
    """Equal values hash the same, so they work as set members."""
    assert hash(soydata.Int(3)) == hash(soydata.Float(3.0))
    assert len({soydata.Int(3), soydata.Float(3.0), soydata.Text("3")}) == 2
    lst = soydata.List([soydata.Int(1)])
    assert hash(lst) == hash(copy.copy(lst))


def test_repr_never_fails():
    """Undefined can be shown in repr even though it can't render."""
    assert repr(soydata.UNDEFINED) == "Undefined()"
    assert repr(soydata.List([soydata.UNDEFINED])) == "List([Undefined()])"
    assert repr(soydata.Text("a")) == "Text('a')"


def test_to_python():
    """Values convert back to plain Python data."""
    value = soydata.Dict({
        "a": soydata.List([soydata.Int(1), soydata.Float(2.5), soydata.Bool(True)]),
        "b": soydata.NULL,
        "c": soydata.Text("x"),
    })
    assert soydata.to_python(value) == {"a": [1, 2.5, True], "b": None, "c": "x"}
    assert soydata.to_python(soydata.UNDEFINED) is None


class TestValidate:
    """validate catches malformed trees."""

    def test_valid_tree(self):
        soydata.validate(soydata.lift({"a": [1, 2.0, "x", None, True]}))

    def test_non_value_element(self):
        with pytest.raises(TypeError):
            soydata.validate(soydata.List([1]))

    def test_bad_payload(self):
        value = soydata.Int(1)
        value.value = "1"
        with pytest.raises(TypeError):
            soydata.validate(value)

    def test_not_a_value(self):
        with pytest.raises(TypeError):
            soydata.validate(42)
