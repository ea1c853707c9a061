"""Run the ofcourse command with `python -m ofcourse`."""

from ofcourse.cli import main

main()
