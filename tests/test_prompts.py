"""Unit tests for interactive prompts."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from genrules.prompts import confirm, multi_select, select

pytestmark = pytest.mark.unit

OPTIONS = ["docker", "husky", "testing", "auth", "shadcn"]


class TestConfirm:
    def test_passes_default(self):
        with patch("genrules.prompts.Confirm.ask", return_value=True) as ask:
            assert confirm("Proceed?", default=True) is True
        assert ask.call_args.kwargs["default"] is True


class TestSelect:
    @pytest.mark.parametrize(
        "answer, expected",
        [("2", "husky"), ("5", "shadcn"), ("", "docker"), ("9", "docker"), ("abc", "docker"), ("0", "docker")],
    )
    def test_answers(self, answer, expected):
        with patch("genrules.prompts.Prompt.ask", return_value=answer):
            assert select("Pick", OPTIONS) == expected


class TestMultiSelect:
    @pytest.mark.parametrize(
        "answer, expected",
        [
            ("all", OPTIONS),
            ("ALL", OPTIONS),
            ("none", []),
            ("", []),
            ("2,1", ["husky", "docker"]),
            ("1, 1, 3", ["docker", "testing"]),
            ("7,x,4", ["auth"]),
        ],
    )
    def test_answers(self, answer, expected):
        with patch("genrules.prompts.Prompt.ask", return_value=answer):
            assert multi_select("Pick", OPTIONS) == expected
