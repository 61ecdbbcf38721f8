"""Tests for occurrence references."""

import pendulum
import pytest

from blockday.error import ValidationError
from blockday.model.ref import concrete_ref, format_ref, is_virtual, parse_ref, virtual_ref


class TestRef:
    def test_concrete_token_is_id(self):
        """A stored occurrence is addressed by its id."""
        assert format_ref(concrete_ref("abc")) == "abc"
        assert parse_ref("abc") == concrete_ref("abc")

    def test_virtual_token(self):
        """A projected occurrence is addressed by template id and date."""
        template_id = "0b6f2b1e-8f0e-4c1a-9a53-1f0f3c1d2e4f"
        ref = virtual_ref(template_id, pendulum.date(2024, 1, 8))

        token = format_ref(ref)

        assert token == f"{template_id}-virtual-2024-01-08"
        parsed = parse_ref(token)
        assert is_virtual(parsed)
        assert parsed == ref

    def test_rejects_empty(self):
        """An empty token is not a reference."""
        with pytest.raises(ValidationError):
            parse_ref("  ")
