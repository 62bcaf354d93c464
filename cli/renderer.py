"""
Order Key Renderer
==================
Formats order keys for the command line.

Modes:
  - text: "[55, 23]" per key
  - raw: JSON wire arrays, one per line ("[55,23]")
  - table: position, key and length as aligned ASCII columns
"""

import json
import sys
from typing import Iterable, List, Optional, TextIO

from ordering.codec import format_key, to_wire


class Renderer:
    """
    Line-oriented key renderer with configurable display mode.
    """

    MODES = ("text", "raw", "table")

    def __init__(self, output: TextIO = None):
        self.output = output or sys.stdout
        self.mode: str = "text"
        self.show_headers: bool = True
        self.display_limit: Optional[int] = None  # None = no limit

    # ─── Public API ─────────────────────────────────────────────────

    def render_key(self, key: bytes):
        self._print(self._format(key))

    def render_keys(self, keys: Iterable[bytes]) -> int:
        """Render keys in the given order. Returns number of keys rendered."""
        keys = list(keys)
        if self.mode == "table":
            return self._render_table(keys)

        count = 0
        for key in keys:
            if self.display_limit is not None and count >= self.display_limit:
                self._print(f"... (display limit {self.display_limit} reached)")
                break
            self._print(self._format(key))
            count += 1
        return count

    def render_comparison(self, a: bytes, b: bytes, result: int):
        if self.mode == "raw":
            self._print(str(result))
            return
        symbol = {-1: "<", 0: "==", 1: ">"}[result]
        self._print(f"{format_key(a)} {symbol} {format_key(b)}  ({result})")

    def render_error(self, error: Exception):
        """Render an error with classification prefix."""
        prefix = self._classify_error(type(error).__name__)
        self._print(f"{prefix}: {error}")

    # ─── Table Mode ─────────────────────────────────────────────────

    def _render_table(self, keys: List[bytes]) -> int:
        if self.display_limit is not None:
            keys = keys[:self.display_limit]
        headers = ["#", "key", "len"]
        rows = [[str(i), format_key(k), str(len(k))] for i, k in enumerate(keys)]
        widths = [
            max([len(h)] + [len(r[c]) for r in rows])
            for c, h in enumerate(headers)
        ]

        separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        if self.show_headers:
            self._print(separator)
            self._print_row(widths, headers)
        self._print(separator)
        for row in rows:
            self._print_row(widths, row)
        self._print(separator)
        self._print(f"\n{len(rows)} key(s)")
        return len(rows)

    def _print_row(self, widths: List[int], values: List[str]):
        cells = [f" {v:<{w}} " for v, w in zip(values, widths)]
        self._print("|" + "|".join(cells) + "|")

    # ─── Helpers ────────────────────────────────────────────────────

    def _format(self, key: bytes) -> str:
        if self.mode == "raw":
            return json.dumps(to_wire(key), separators=(",", ":"))
        return format_key(key)

    def _classify_error(self, error_type: str) -> str:
        """Map error class name to user-friendly prefix."""
        mapping = {
            "OrderKeyError": "InvalidKey",
            "ValueError": "InputError",
        }
        return mapping.get(error_type, f"Error[{error_type}]")

    def _print(self, text: str):
        """Print a line to the output stream."""
        print(text, file=self.output)
