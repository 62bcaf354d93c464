"""
orderkeys: Order Key Toolkit
============================
Command-line entry point for computing and inspecting order keys.

Usage:
    python main.py COMMAND [ARGS] [options]

Keys are written as comma-separated bytes: 55,23
"""

import sys
from typing import List, Optional, TextIO

from cli.renderer import Renderer
from ordering.codec import parse_key
from ordering.keys import (
    compare, new_key, new_key_after, new_key_before, new_key_between,
    new_key_at_end, new_key_at_start, sort_keys,
)


def print_help(output: TextIO = None):
    print("""
orderkeys: Order Key Toolkit

Usage:
    python main.py compare A B          Compare two keys (-1, 0, 1)
    python main.py after K              Key after K
    python main.py before K             Key before K
    python main.py between A B          Key between A and B
    python main.py end K [K ...]        Key after all given keys
    python main.py start K [K ...]      Key before all given keys
    python main.py new                  Key for an empty container
    python main.py sort K [K ...]       Print keys in order
    python main.py fill N [--at POS]    Generate N keys at end/start/middle

Options:
    --help          Show this help
    --mode M        Output mode: text (default), raw, table
    --at POS        Insertion position for fill: end (default), start, middle

Keys:
    55,23  or  "[55, 23]"
""", file=output or sys.stdout)


# ─── Commands ───────────────────────────────────────────────────────────────

def _expect(args: List[str], count: int, command: str) -> List[bytes]:
    if len(args) != count:
        raise ValueError(f"'{command}' takes {count} key(s), got {len(args)}")
    return [parse_key(a) for a in args]


def _at_least_one(args: List[str], command: str) -> List[bytes]:
    if not args:
        raise ValueError(f"'{command}' takes at least one key")
    return [parse_key(a) for a in args]


def fill(count: int, position: str = "end") -> List[bytes]:
    """
    Generate ``count`` keys by repeated insertion, returned in key order.

    end/start: each key goes after/before all previous ones.
    middle: each key goes between the first key and the previous insert.
    """
    if count < 0:
        raise ValueError(f"fill count must be non-negative, got {count}")

    keys: List[bytes] = []
    if position == "end":
        for _ in range(count):
            keys.append(new_key_at_end(keys))
    elif position == "start":
        for _ in range(count):
            keys.append(new_key_at_start(keys))
    elif position == "middle":
        if count == 0:
            return []
        low = new_key()
        high = new_key_after(low)
        keys.append(low)
        for _ in range(count - 1):
            high = new_key_between(low, high)
            keys.append(high)
    else:
        raise ValueError(f"Unknown fill position: {position!r}")
    return sort_keys(keys)


def run_command(command: str, args: List[str], renderer: Renderer):
    """Dispatch one command. Raises on bad input."""
    if command == "compare":
        a, b = _expect(args, 2, command)
        renderer.render_comparison(a, b, compare(a, b))
    elif command == "after":
        (k,) = _expect(args, 1, command)
        renderer.render_key(new_key_after(k))
    elif command == "before":
        (k,) = _expect(args, 1, command)
        renderer.render_key(new_key_before(k))
    elif command == "between":
        a, b = _expect(args, 2, command)
        renderer.render_key(new_key_between(a, b))
    elif command == "end":
        renderer.render_key(new_key_at_end(_at_least_one(args, command)))
    elif command == "start":
        renderer.render_key(new_key_at_start(_at_least_one(args, command)))
    elif command == "new":
        _expect(args, 0, command)
        renderer.render_key(new_key())
    elif command == "sort":
        renderer.render_keys(sort_keys(_at_least_one(args, command)))
    else:
        raise ValueError(f"Unknown command: {command}")


# ─── Entry Point ────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None, output: TextIO = None) -> int:
    """Parse CLI arguments and dispatch. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    output = output or sys.stdout

    if not args or "--help" in args or "-h" in args:
        print_help(output)
        return 0

    renderer = Renderer(output)
    position = "end"
    positional: List[str] = []

    i = 0
    while i < len(args):
        if args[i] == "--mode" and i + 1 < len(args):
            renderer.mode = args[i + 1]
            i += 2
        elif args[i] == "--at" and i + 1 < len(args):
            position = args[i + 1]
            i += 2
        elif args[i].startswith("--"):
            renderer.render_error(ValueError(f"Unknown option: {args[i]}"))
            print_help(output)
            return 1
        else:
            positional.append(args[i])
            i += 1

    if renderer.mode not in Renderer.MODES:
        renderer.render_error(ValueError(f"Unknown mode: {renderer.mode}"))
        return 1

    if not positional:
        print_help(output)
        return 1

    command, rest = positional[0], positional[1:]
    try:
        if command == "fill":
            if len(rest) != 1:
                raise ValueError("'fill' takes one count")
            renderer.render_keys(fill(int(rest[0]), position))
        else:
            run_command(command, rest, renderer)
    except ValueError as e:
        renderer.render_error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
