"""Shared fixtures: a fresh chain with TestToken and OXStadium deployed"""

import pytest

from .chain import Chain
from .erc20 import TestToken
from .stadium import OXStadium

BASE_URI = "https://baseURI.com/"


@pytest.fixture
def chain():
    return Chain()


@pytest.fixture
def signers(chain):
    return chain.signers


@pytest.fixture
def owner(signers):
    return signers[0]


@pytest.fixture
def addr1(signers):
    return signers[1]


@pytest.fixture
def addr2(signers):
    return signers[2]


@pytest.fixture
def token(chain, owner):
    return chain.deploy(TestToken, sender=owner)


@pytest.fixture
def stadiums(chain, owner, token):
    return chain.deploy(OXStadium, token.address, BASE_URI, sender=owner)
