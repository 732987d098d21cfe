from typing import List

import pytest

from helpers import first_index_by_colour


@pytest.fixture
def exact_indices() -> List[int]:
    """Indices whose colour maps back to themselves under a nearest search."""
    return sorted(first_index_by_colour().values())
