"""Tests for waypost.__init__ — lazy import registry covers all public names."""

import pytest

import waypost


@pytest.mark.parametrize("name", waypost.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(waypost, name)
    assert obj is not None, f"waypost.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        waypost.__getattr__("ThisDoesNotExist")
