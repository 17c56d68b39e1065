"""Allow ``python -m outline_navigator [PDF]``."""

from outline_navigator.cli import main

main()
