# SPDX-License-Identifier: MIT

import atexit

from timespan.repository.store import close_repository


def register_cleanup() -> None:
    atexit.register(close_repository)
