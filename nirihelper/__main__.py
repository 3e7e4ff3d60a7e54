"""Allow running as `python -m nirihelper`."""

from .command import main

main()
