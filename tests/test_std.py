import pytest

from scrap.builtin.std import NATIVES, at, create, keys, length, make_std, push, set_prototype, typeof
from scrap.errors import ScrapTypeError
from scrap.types.functions import NativeFunction
from scrap.types.values import (
    Array, Bool, Integer, Object, PropertyDescriptor, String, Undefined,
)


def test_std_module_exports_every_native():
    std = make_std()
    assert std.is_exported
    assert set(std.exports()) == set(NATIVES)
    assert all(isinstance(fn, NativeFunction) for fn in std.exports().values())


@pytest.mark.parametrize(
    "value, expected",
    [
        (String("abc"), 3),
        (Array([Integer(1)]), 1),
        (Object(None, {"a": PropertyDescriptor(Integer(1))}), 1),
    ],
)
def test_len(value, expected):
    assert length(value) == Integer(expected)


def test_len_of_number_fails():
    with pytest.raises(ScrapTypeError, match="len expects"):
        length(Integer(1))


def test_push_mutates_in_place():
    arr = Array()
    assert push(arr, Integer(7)) == Integer(1)
    assert arr.get(0) == Integer(7)
    with pytest.raises(ScrapTypeError):
        push(Object(), Integer(1))


def test_at():
    arr = Array([String("a")])
    assert at(arr, Integer(0)) == String("a")
    assert at(arr, Integer(5)) is Undefined
    with pytest.raises(ScrapTypeError):
        at(arr, String("0"))


def test_keys_are_own_keys_only():
    proto = Object(None, {"inherited": PropertyDescriptor(Integer(1))})
    child = Object(proto, {"own": PropertyDescriptor(Integer(2))})
    assert keys(child).value == [String("own")]


@pytest.mark.parametrize(
    "value, expected",
    [
        (Integer(1), "Integer"),
        (Bool(True), "Boolean"),
        (Undefined, "Undefined"),
        (Object(), "Object"),
        (NativeFunction("f", print), "Function"),
    ],
)
def test_typeof(value, expected):
    assert typeof(value) == String(expected)


def test_create_and_set_prototype():
    base = Object()
    child = create(base)
    assert child.prototype is base
    assert create().prototype is None
    assert set_prototype(child, Undefined) is child
    assert child.prototype is None
    with pytest.raises(ScrapTypeError):
        create(Integer(1))


def test_natives_from_scrap_code(call_main):
    source = """
    fn main() {
        const xs = []
        std::push(xs, 1)
        std::push(xs, "two")
        return [std::len(xs), std::at(xs, 1), std::keys({ k: 1 }), std::typeof(xs)]
    }
    """
    assert call_main(source).format() == '[2, "two", ["k"], "Array"]'


def test_print_separates_with_spaces(call_main, capsys):
    call_main('fn main() { std::print("a", \'b\', 1.5, { x: "y" }) }')
    assert capsys.readouterr().out == 'a b 1.5 { x: "y" }\n'


def test_print_without_arguments(call_main, capsys):
    call_main("fn main() { std::print() }")
    assert capsys.readouterr().out == "\n"
