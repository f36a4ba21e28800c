from __future__ import annotations

from typing import Any, Dict, List


def split_args(text: str) -> List[str]:
    """
    Split a console argument string into CLI arguments.

    Whitespace separates arguments; single or double quotes group them, and a
    backslash inside quotes escapes the next character. Unterminated quotes
    run to the end of the input.
    """
    args: List[str] = []
    current: List[str] = []
    quote = ""
    chars = iter(text or "")
    for ch in chars:
        if quote:
            if ch == quote:
                quote = ""
            elif ch == "\\":
                nxt = next(chars, None)
                if nxt is not None:
                    current.append(nxt)
            else:
                current.append(ch)
        elif ch in ("'", '"'):
            quote = ch
        elif ch.isspace():
            if current:
                args.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        args.append("".join(current))
    return args


def parse_balances(value: Any, balances: Dict[str, float]) -> None:
    """
    Collect ``address -> amount`` pairs from ``listaddressgroupings`` output.

    The payload is a list of groups, each a list of ``[address, amount, ...]``
    rows. Nesting depth varies between daemon versions, so every list that
    starts with a string and a number is treated as a row.
    """
    stack = [value]
    while stack:
        node = stack.pop()
        if not isinstance(node, list):
            continue
        for item in node:
            if not isinstance(item, list):
                continue
            if len(item) >= 2 and isinstance(item[0], str) and _is_number(item[1]):
                balances[item[0]] = float(item[1])
            stack.append(item)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_size(size_bytes: int) -> str:
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024
    if size_bytes >= gb:
        return f"{size_bytes / gb:.2f} GB"
    if size_bytes >= mb:
        return f"{size_bytes / mb:.2f} MB"
    if size_bytes >= kb:
        return f"{size_bytes / kb:.2f} KB"
    return f"{size_bytes} bytes"


def format_quantity(value: float) -> str:
    """Render a parsed quantity without a trailing ``.0`` for whole numbers."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


__all__ = ["format_quantity", "format_size", "parse_balances", "split_args"]
