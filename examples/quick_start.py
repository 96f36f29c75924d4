#!/usr/bin/env python3
# Example usage of filemap
# The map never creates its directory; a temporary one is used here.

import logging
import tempfile
from filemap import FileMap, NotFound
from rich.console import Console

console = Console()

def progress_printer(evt):
    phase = evt.get("phase", "")
    pct = int(evt.get("pct", 0))
    msg = evt.get("msg", "")
    line = f"[progress] {phase} {pct}%"
    if msg:
        line += f" - {msg}"
    console.print(line, highlight=False)

def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    with tempfile.TemporaryDirectory() as d:
        m = FileMap(d, on_progress=progress_printer)

        # One file per entry; the file name is the encoded key
        m.set("alpha", b"\x01\x02")
        m.set("users/42", b'{"name": "Alice"}')
        console.print("entries:", m.num_entries())
        console.print("alpha:", m.get("alpha"))

        # Full traversal, order is whatever the directory listing gives
        m.range(lambda k, v: console.print(f"  {k!r} -> {v!r}"))

        m.delete("alpha")
        try:
            m.get("alpha")
        except NotFound as e:
            console.print("after delete:", e)

if __name__ == "__main__":
    main()
