import logging
import os
import sys

from ardraw.core.core import AppCore


def main():
    logging.basicConfig(
        level=os.environ.get("ARDRAW_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    core = AppCore(sys.argv)
    return core.run()


if __name__ == "__main__":
    sys.exit(main())
