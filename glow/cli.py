import logging
import sys
from pathlib import Path

import fncli

from .core.errors import GlowError

_VERBOSE_FLAGS = {"-v", "--verbose"}


def main():
    user_args = sys.argv[1:]
    if _VERBOSE_FLAGS & set(user_args):
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )
        user_args = [a for a in user_args if a not in _VERBOSE_FLAGS]

    fncli.autodiscover(Path(__file__).parent, "glow")

    if not user_args:
        from .dash import today

        try:
            today()
        except GlowError as e:
            sys.stderr.write(f"{e}\n")
            sys.exit(1)
        return
    argv = ["glow", *user_args]
    try:
        code = fncli.dispatch(argv)
    except GlowError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
