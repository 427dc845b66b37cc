"""Development entry point (no install needed).

Run the CLI from a checkout with:
- `python -m main ...`

Code lives under `src/`; without an editable install Python cannot find
`cli`, `core` or `adapters`, so this shim puts `src/` on the path first.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    # cp1252 Windows consoles cannot encode the banner or accented names.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
