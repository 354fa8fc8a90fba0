"""Mark every test collected below `tests/unit/` as `unit`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

TREE_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the `unit` mark unless the test already carries it."""
    for item in items:
        if TREE_ROOT not in item.path.resolve().parents:
            continue
        if item.get_closest_marker("unit") is None:
            item.add_marker(pytest.mark.unit)
