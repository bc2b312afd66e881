"""Tests for uid module."""

import re

from elevate_core.utils import uid

UUID4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def test_generates_lowercase_uuid4_string():
    assert UUID4.match(uid.generate_uuid())


def test_ids_are_unique():
    assert len({uid.generate_uuid() for _ in range(200)}) == 200
