# SPDX-License-Identifier: MIT

from timespan.cleanup import register_cleanup
from timespan.initialize import initialize
from timespan.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
