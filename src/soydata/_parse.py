"""Parse value literals into template values.

Literal syntax mirrors rendered text, with quoted strings:

    null  true  false  42  -0x1F  3.14  1e-05  'text'  "text"
    [1, 'a', true]
    {'name': 'Ada', age: 36}

Map keys are quoted strings or bare identifiers. Every list and map literal
builds a new instance, so two parses of the same text never share storage.
"""

__all__ = ["parse_value"]

import re

import lark
import soydata


_parsers = {}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)


def parse_value(text):
    """Parse a value literal and return a Value.

    Args:
        text: (str) Literal text, like "[1, 2, {'x': null}]"
    Returns:
        (Value) The parsed value
    Raises:
        ParseError: If text has invalid syntax
    """
    parser = _lark_parser("value")
    try:
        tree = parser.parse(text)
    except lark.exceptions.UnexpectedInput as e:
        raise soydata.ParseError(
            f"Invalid value literal: {e}", (e.line, e.column)
        ) from e
    return _convert_tree(tree)


def _convert_tree(tree):
    """Convert a single Lark tree to a Value, recursing into containers."""
    match tree.data:
        case "null":
            return soydata.NULL
        case "true":
            return soydata.Bool(True)
        case "false":
            return soydata.Bool(False)
        case "number":
            return _number(tree.children[0])
        case "string":
            return soydata.Text(_unquote(tree.children[0]))
        case "list":
            return soydata.List([_convert_tree(kid) for kid in tree.children])
        case "map":
            entries = {}
            for entry in tree.children:
                name, kid = entry.children
                if name.type == "STRING":
                    name = _unquote(name)
                entries[str(name)] = _convert_tree(kid)
            return soydata.Dict(entries)
    raise soydata.ParseError(f"Unexpected literal node {tree.data}", _pos(tree))


def _number(token):
    """Int or Float value from a NUMBER token."""
    text = str(token)
    digits = text.lstrip("-")
    if digits[:2] in ("0x", "0X"):
        num = int(digits[2:], 16)
        return soydata.Int(-num if text.startswith("-") else num)
    if any(c in digits for c in ".eE"):
        return soydata.Float(float(text))
    return soydata.Int(int(text))


def _unquote(token):
    """Contents of a quoted STRING token with escapes resolved."""

    def replace(match):
        esc = match.group(1)
        if len(esc) == 5:
            return chr(int(esc[1:], 16))
        try:
            return _ESCAPES[esc]
        except KeyError:
            raise soydata.ParseError(f"Invalid escape sequence \\{esc}", _pos(token))

    return _ESCAPE_RE.sub(replace, str(token)[1:-1])


def _pos(treetoken):
    """(line, column) of a lark Tree or Token."""
    if isinstance(treetoken, lark.Token):
        return (treetoken.line, treetoken.column)
    meta = treetoken.meta
    return (getattr(meta, "line", None), getattr(meta, "column", None))


def _lark_parser(name):
    """LALR parser for a grammar shipped in the package `lark/` directory.

    Building the parser tables is slow, so each grammar is compiled on first
    use and the instance is shared by every later `parse_value` call.

    Args:
        name: (str) grammar file name, without the .lark suffix
    Returns:
        (lark.Lark) Parser for that grammar
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="lalr", propagate_positions=True
    )
    _parsers[name] = parser
    return parser
