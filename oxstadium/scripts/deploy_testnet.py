#!/usr/bin/env python3
"""Deploy OXStadium to BNB Smart Chain testnet"""

import sys

from .deploy import run, setup_logging


def main():
    setup_logging()
    sys.exit(run("testnet"))


if __name__ == "__main__":
    main()
