"""Allow `python -m pocketvest`."""

from pocketvest.cli import main

main()
