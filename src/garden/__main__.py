"""Allow ``python -m garden``."""

from garden.cli import main

main()
