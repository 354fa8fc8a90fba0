"""Mark every test collected below `tests/e2e/` as `e2e`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

TREE_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the `e2e` mark unless the test already carries it."""
    for item in items:
        if TREE_ROOT not in item.path.resolve().parents:
            continue
        if item.get_closest_marker("e2e") is None:
            item.add_marker(pytest.mark.e2e)
