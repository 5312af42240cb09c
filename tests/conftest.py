from __future__ import annotations

import os

import pytest

TESTDATA = os.path.join(os.path.dirname(__file__), "testdata")


@pytest.fixture
def testdata_path():
    def _path(name: str) -> str:
        return os.path.join(TESTDATA, name)

    return _path


@pytest.fixture
def read_testdata(testdata_path):
    def _read(name: str) -> str:
        with open(testdata_path(name), "r", encoding="utf-8") as handle:
            return handle.read()

    return _read
