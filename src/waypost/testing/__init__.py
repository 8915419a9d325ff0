"""Test utilities for waypost applications.

Provides a hook recorder for scripted components and outcome/call-order
assertions::

    from waypost.testing import HookRecorder, assert_call_order
"""

from waypost.testing.assertions import (
    assert_call_order,
    assert_cancelled,
    assert_no_lifecycle_calls,
    assert_proceeded,
)
from waypost.testing.recorder import HookCall, HookRecorder

__all__ = [
    "HookCall",
    "HookRecorder",
    "assert_call_order",
    "assert_cancelled",
    "assert_no_lifecycle_calls",
    "assert_proceeded",
]
