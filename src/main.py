"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` desde `src/` además del script
`eve-items` instalado.
"""

from __future__ import annotations

import sys

# Rich prints m³ and box characters; cp1252 consoles cannot encode them.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
