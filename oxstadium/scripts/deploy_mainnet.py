#!/usr/bin/env python3
"""Deploy OXStadium to BNB Smart Chain mainnet"""

import sys

from .deploy import run, setup_logging


def main():
    setup_logging()
    sys.exit(run("mainnet"))


if __name__ == "__main__":
    main()
