from __future__ import annotations

import pytest

from tests.pages import build_page


@pytest.fixture
def make_page():
    return build_page
