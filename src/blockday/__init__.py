# SPDX-License-Identifier: MIT

from blockday.cleanup import register_cleanup
from blockday.initialize import initialize
from blockday.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
