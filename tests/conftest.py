from __future__ import annotations

import os
import os.path

import pytest


class Helpers:
    def __init__(self, request, tmpdir):
        # current information about the running test
        # docs: https://docs.pytest.org/en/6.2.x/reference.html#std-fixture-request
        self.request = request
        self.tmpdir = tmpdir

    def local_dir(self, path: str):
        """
        Returns the path of a file relative to the current test file.

        Given the following setup:

            tests/unit/cli/
            ├── test-fixtures
            │   ├── minimal.yaml
            │   └── full.yaml
            └── test_config.py

        The call `local_dir("test-fixtures/minimal.yaml")` will return the absolute path to
        the fixture file relative to test_config.py
        """
        current_test_filepath = os.path.realpath(self.request.module.__file__)
        parent = os.path.realpath(os.path.dirname(current_test_filepath))
        return os.path.join(parent, path)


@pytest.fixture
def helpers(request, tmpdir):
    """
    Returns a common set of helper functions for tests.
    """
    return Helpers(request, tmpdir)
