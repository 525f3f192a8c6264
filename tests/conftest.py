from __future__ import annotations

from pathlib import Path

import pytest

from cleanhtml.policy import DEFAULT_POLICY, Policy
from cleanhtml.sanitize import Sanitizer


def data_path() -> Path:
    """
    :return: Absolute path to test fixtures dir
    """
    return Path(__file__).parent / "fixtures"


def read_text(path: Path) -> str:
    """
    :param path: File path
    :return: File contents as UTF-8 text
    """
    return path.read_text(encoding="utf-8")


@pytest.fixture
def make_sanitizer():
    """
    :return: Factory building a Sanitizer from the default policy with some
             fields changed
    """

    def factory(**changes) -> Sanitizer:
        policy: Policy = DEFAULT_POLICY.replace(**changes) if changes else DEFAULT_POLICY
        return Sanitizer(policy)

    return factory
