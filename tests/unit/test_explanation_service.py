"""Tests for myguard/services/explanation_service.py — explanations and tips."""

import asyncio

import pytest

from myguard.exceptions import CollaboratorError, EmptyInputError
from myguard.services.explanation_service import (
    CONTRACT_TIPS,
    ExplanationService,
    contract_tips,
    parse_key_points,
)


class TestTips:

    def test_five_tips(self):
        assert len(contract_tips()) == 5

    def test_returns_copy(self):
        tips = contract_tips()
        tips.append("extra")
        assert len(CONTRACT_TIPS) == 5


class TestParseKeyPoints:

    def test_strips_bullets(self):
        text = "- First point\n* Second point\n• Third point"
        assert parse_key_points(text) == ["First point", "Second point", "Third point"]

    def test_drops_empty_lines(self):
        assert parse_key_points("- One\n\n   \n- Two") == ["One", "Two"]


class TestExplain:

    def test_builds_explanation(self, make_client):
        client = make_client(responses={
            "summary": "Here's a summary:\nThe tenant pays rent monthly.",
            "key points": "- Monthly rent\n- Due on the first\n- Paid to landlord",
            "recommendations": "Set up automatic payments.",
        })
        explanation = asyncio.run(ExplanationService(client).explain("Rent is due monthly"))
        assert explanation.summary == "The tenant pays rent monthly."
        assert explanation.key_points == ["Monthly rent", "Due on the first", "Paid to landlord"]
        assert explanation.recommendations == "Set up automatic payments."
        assert len(client.prompts) == 3

    def test_blank_text(self, make_client):
        client = make_client()
        with pytest.raises(EmptyInputError):
            asyncio.run(ExplanationService(client).explain("   "))
        assert client.prompts == []

    def test_model_failure(self, make_client):
        client = make_client(error=RuntimeError("down"))
        with pytest.raises(CollaboratorError):
            asyncio.run(ExplanationService(client, max_attempts=1).explain("Rent is due"))

    def test_empty_response(self, make_client):
        client = make_client(default="")
        with pytest.raises(CollaboratorError):
            asyncio.run(ExplanationService(client, max_attempts=1).explain("Rent is due"))
