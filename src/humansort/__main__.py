"""Allow running as python -m humansort."""

from humansort.cli import main

main()
