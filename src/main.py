"""Script de ejecución.

Permite ejecutar la CLI con `python src/main.py ...` además del script
`spl-issuer` instalado por pip.
"""

from __future__ import annotations

import sys

# Terminales Windows con cp1252: Rich y los logs usan UTF-8.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
