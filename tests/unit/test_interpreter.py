"""
Unit tests for free-text interpretation.
"""

import json

import pytest

from workflow_radar.core.constants import Frequency, NotifyCondition
from workflow_radar.core.exceptions import (
    InputTooLongError,
    InvalidRequestError,
    MalformedResponseError,
    SchemaViolationError,
)
from workflow_radar.domain.interpretation import InterpretationContext
from workflow_radar.services.interpreter import InterpretationValidator


class TestInterpretationValidator:
    """Tests for InterpretationValidator."""

    @pytest.fixture
    def validator(self, fake_client) -> InterpretationValidator:
        return InterpretationValidator(fake_client, default_model="test-model")

    @pytest.mark.asyncio
    async def test_valid_reply(self, validator, fake_client, interpretation_payload):
        fake_client.replies = [json.dumps(interpretation_payload)]

        result = await validator.interpret("ai crypto sentiment")

        assert result.what.topic == "AI sentiment about cryptocurrency"
        assert result.is_trackable
        assert result.when.frequency == Frequency.DAILY
        assert result.when.notify_condition == NotifyCondition.SIGNIFICANT_CHANGE
        assert len(result.when.options) == 3
        assert result.recommended_option.value == "significant_change"
        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [2, 4])
    async def test_wrong_option_count(self, validator, fake_client, interpretation_payload, count):
        option = {"label": "Extra", "value": "always", "isRecommended": False}
        interpretation_payload["when"]["options"] = [option] * count
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError) as exc_info:
            await validator.interpret("ai crypto sentiment")

        assert any(v.startswith("when.options") for v in exc_info.value.violations)

    @pytest.mark.asyncio
    async def test_too_many_suggested_insights(self, validator, fake_client, interpretation_payload):
        interpretation_payload["why"]["suggestedInsights"] = ["a", "b", "c", "d"]
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError):
            await validator.interpret("ai crypto sentiment")

    @pytest.mark.asyncio
    async def test_missing_group(self, validator, fake_client, interpretation_payload):
        del interpretation_payload["why"]
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError) as exc_info:
            await validator.interpret("ai crypto sentiment")

        assert "why: Field required" in exc_info.value.violations

    @pytest.mark.asyncio
    async def test_unknown_frequency(self, validator, fake_client, interpretation_payload):
        interpretation_payload["when"]["frequency"] = "fortnightly"
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError):
            await validator.interpret("ai crypto sentiment")

    @pytest.mark.asyncio
    async def test_confidence_out_of_range(self, validator, fake_client, interpretation_payload):
        interpretation_payload["what"]["confidence"] = 1.5
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError):
            await validator.interpret("ai crypto sentiment")

    @pytest.mark.asyncio
    async def test_non_json_reply(self, validator, fake_client):
        fake_client.replies = ["not json"]

        with pytest.raises(MalformedResponseError) as exc_info:
            await validator.interpret("ai crypto sentiment")

        assert exc_info.value.details["response_excerpt"] == "not json"
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_json_array_reply(self, validator, fake_client):
        fake_client.replies = ["[]"]

        with pytest.raises(SchemaViolationError):
            await validator.interpret("ai crypto sentiment")

    @pytest.mark.asyncio
    async def test_input_too_long_makes_no_call(self, validator, fake_client):
        with pytest.raises(InputTooLongError) as exc_info:
            await validator.interpret("x" * 501)

        assert exc_info.value.status_code == 413
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_input_at_limit_is_accepted(self, validator, fake_client, interpretation_payload):
        fake_client.replies = [json.dumps(interpretation_payload)]

        await validator.interpret("x" * 500)

        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    async def test_blank_input(self, validator, fake_client):
        with pytest.raises(InvalidRequestError):
            await validator.interpret("   ")

        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_untrackable_topic_still_validated(self, validator, fake_client, interpretation_payload):
        interpretation_payload["what"]["isValid"] = False
        interpretation_payload["what"]["confidence"] = 0.1
        fake_client.replies = [json.dumps(interpretation_payload)]

        result = await validator.interpret("asdf qwer")

        assert result.is_trackable is False
        assert len(result.when.options) == 3

    @pytest.mark.asyncio
    async def test_context_in_prompt(self, validator, fake_client, interpretation_payload):
        fake_client.replies = [json.dumps(interpretation_payload)]
        context = InterpretationContext(existingTopics=["Bitcoin price"])

        await validator.interpret("ai crypto sentiment", context=context)

        prompt = fake_client.calls[0]["prompt"]
        assert "ai crypto sentiment" in prompt
        assert "- Bitcoin price" in prompt

    @pytest.mark.asyncio
    async def test_model_default_and_override(self, validator, fake_client, interpretation_payload):
        fake_client.replies = [json.dumps(interpretation_payload)]

        await validator.interpret("ai crypto sentiment")
        await validator.interpret("ai crypto sentiment", model="other-model")

        assert [call["model"] for call in fake_client.calls] == ["test-model", "other-model"]

    @pytest.mark.asyncio
    async def test_missing_suggested_insights(self, validator, fake_client, interpretation_payload):
        del interpretation_payload["why"]["suggestedInsights"]
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError) as exc_info:
            await validator.interpret("ai crypto sentiment")

        assert "why.suggestedInsights: Field required" in exc_info.value.violations

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "group,field,value",
        [
            ("what", "isValid", "yes"),
            ("what", "confidence", "0.5"),
            ("what", "topic", 42),
            ("when", "frequency", 1),
        ],
    )
    async def test_wrong_json_type_is_not_coerced(
        self, validator, fake_client, interpretation_payload, group, field, value
    ):
        interpretation_payload[group][field] = value
        fake_client.replies = [json.dumps(interpretation_payload)]

        with pytest.raises(SchemaViolationError) as exc_info:
            await validator.interpret("ai crypto sentiment")

        assert any(v.startswith(f"{group}.{field}") for v in exc_info.value.violations)
