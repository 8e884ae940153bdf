from __future__ import annotations

from cpeparser.cli import run

if __name__ == "__main__":
    run()
